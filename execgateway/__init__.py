# -*- coding: utf-8 -*-
"""Execution Gateway.

Copyright 2025
SPDX-License-Identifier: Apache-2.0

HTTP gateway fronting a persistent store, enforcing a cross-origin policy and
relaying code-execution requests to an external execution engine.
"""

__version__ = "0.1.0"
