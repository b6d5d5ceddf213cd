# -*- coding: utf-8 -*-
import sys

from stirling_init.main import main

sys.exit(main())
