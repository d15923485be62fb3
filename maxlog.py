#!/usr/bin/env python3
"""
maxlog CLI Tool

Colorized container logs for Kubernetes pods and Podman/Docker containers.
"""

import sys

from maxlog_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
