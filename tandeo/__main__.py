#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""``python -m tandeo`` entry point."""
from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    main()
