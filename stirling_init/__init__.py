# -*- coding: utf-8 -*-
"""
Container init for the Stirling-PDF image: stages Tesseract data, installs
language packs, optionally fetches the security-enabled JAR and then execs
the application.
"""

__version__ = "0.1.0"
