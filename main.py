#!/usr/bin/env python3
"""pathux - path text utilities that understand ~."""

from pathux.main import main

if __name__ == "__main__":
    raise SystemExit(main())
