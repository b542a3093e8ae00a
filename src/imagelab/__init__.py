"""imagelab: a proxy in front of third-party image processing vendors."""
