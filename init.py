#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Entry point for the Stirling-PDF container.

Usage (Dockerfile): ENTRYPOINT ["python3", "/scripts/init.py"]
                    CMD ["java", "-jar", "/app.jar"]
"""

import sys

from stirling_init.main import main

if __name__ == "__main__":
    sys.exit(main())
