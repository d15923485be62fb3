"""
maxlog - colorized container log viewer for Kubernetes and Podman/Docker

This package streams the logs of one runtime container or of every pod of an
application type, merges them onto stdout and decorates known log markers
with color-coded labels.
"""

__version__ = "0.0.4"
__author__ = "maxlog authors"
