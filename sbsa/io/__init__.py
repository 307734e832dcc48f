"""Frame I/O: the only place SBSA touches the filesystem."""
