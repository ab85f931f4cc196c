#!/usr/bin/env python3
"""
Entry point for the SSH tunnel command line tool.
"""

from sshforward.main import main

if __name__ == "__main__":
    main()
