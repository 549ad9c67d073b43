"""HTTP applications: per-domain RPC apps and the public gateway."""
