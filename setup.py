#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Legacy entry point for numkit; all metadata lives in pyproject.toml.
Kept so that tools which still invoke ``setup.py`` directly can build the
package.
"""

import setuptools

if __name__ == "__main__":
    setuptools.setup()
