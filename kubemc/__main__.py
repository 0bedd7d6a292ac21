"""Entry point for ``python -m kubemc``."""

import sys

from kubemc.cli import main

sys.exit(main())
