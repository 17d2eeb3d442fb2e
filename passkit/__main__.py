#!/usr/bin/env python3
"""Allow `python -m passkit`."""

import sys

from passkit.cli import main

sys.exit(main())
