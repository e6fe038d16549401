"""Network-facing adapters: the hot-topic seeder and the AI idea generator."""
