"""Bootstrap a local Lightcone development environment."""
