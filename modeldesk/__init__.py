# -*- coding: utf-8 -*-
"""Model configuration list and general preferences."""

__version__ = "0.1.0"
