"""HTTP and other delivery adapters."""
