"""Run the ironseal command line from a source checkout.

    python main.py seal "payload" --password-env IRON_PASSWORD
    python main.py unseal TOKEN --password-file passwords.json

Installed copies get the same commands through the `ironseal` script.
"""

from __future__ import annotations

import sys
from pathlib import Path

# src/ layout: make `import ironseal` work without installing
SRC = Path(__file__).resolve().parent / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from ironseal.frontend.cli.app import main


if __name__ == "__main__":
    sys.exit(main())
