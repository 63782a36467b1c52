# -*- coding: utf-8 -*-
"""Location: ./execgateway/services/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Services Package.
Exposes the gateway's core services:
- Backing-store connection management
- Execution engine proxying
- Logging
"""
