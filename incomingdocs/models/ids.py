from __future__ import annotations
from typing import NewType

DocumentId = NewType("DocumentId", str)
InboxItemId = NewType("InboxItemId", str)
