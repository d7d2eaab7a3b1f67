"""Entry point: ``import init`` loads every ``*.env`` file and ``init.d/*.py``.

Running this file directly is a usage error; it must be imported so the
loaded definitions end up in the importing process.
"""

import sys

from initd_common import InitError, ensure_sourced, initialize

try:
    ensure_sourced(__name__)
except InitError as exc:
    print(exc, file=sys.stderr)
    sys.exit(1)

context = initialize(__file__)
