from typing import Iterator, Optional

from fastapi import Depends

from ..auth import get_current_user_id
from ..context import Context, open_context


def get_context(user_id: Optional[str] = Depends(get_current_user_id)) -> Iterator[Context]:
    """One transaction per request; rolled back if the handler raises."""
    with open_context(user_id) as ctx:
        yield ctx
