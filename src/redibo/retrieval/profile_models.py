from typing import List

from pydantic import BaseModel, Field

HOST_ROLE = "HOST"


class UserProfile(BaseModel):
    """Signed-in user as returned by ``/api/perfil``."""
    id: int
    name: str = ""
    email: str = ""
    city: str = ""
    roles: List[str] = Field(default_factory=list)

    def has_role(self, role: str) -> bool:
        return role in self.roles
