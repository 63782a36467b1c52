# -*- coding: utf-8 -*-
"""Allow ``python -m execgateway``."""

# First-Party
from execgateway.cli import main

main()
