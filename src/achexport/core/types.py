"""Type aliases used across achexport."""

from __future__ import annotations

from typing import Any

JsonDict = dict[str, Any]
BatchId = str
CompanyId = str
RoutingNumber = str
Cents = int
