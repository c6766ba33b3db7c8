"""Infrastructure shared by feature layers: logging, filesystem, persistence codecs."""
