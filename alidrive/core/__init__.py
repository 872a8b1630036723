"""AliDrive core: API transport, crypto helpers and upload pipeline."""
