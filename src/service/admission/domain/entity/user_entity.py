from typing import Optional

import attrs


@attrs.define
class UserEntity:
    id: int
    name: str
    email: str
    phone: Optional[str] = None
