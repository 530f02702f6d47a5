"""Version string normalisation.

npm ranges such as ``^1.2.3``, ``~2.0.0`` or ``>=1.0.0 <2.0.0`` are reduced
to their bare version text by removing every range operator character.
Nothing else in the string is touched, so ``>=1.0.0 <2.0.0`` becomes
``1.0.0 2.0.0`` and ``latest`` stays ``latest``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping


RANGE_OPERATORS = "~^><="

_OPERATOR_RE = re.compile(f"[{re.escape(RANGE_OPERATORS)}]")


def normalize_version(value: str) -> str:
    return _OPERATOR_RE.sub("", value)


def normalize_dependencies(dependencies: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of ``dependencies`` with every version normalised.

    Keys are kept as-is and in their original order.
    """
    return {name: normalize_version(version) for name, version in dependencies.items()}
