from pydantic import BaseModel
from typing import Dict


class Profile(BaseModel):
    max_images: int = 200
    default_author: str = "Activity Books"
    include_readme: bool = True


DEFAULT = Profile()
PREVIEW = Profile(max_images=20, include_readme=False)

PROFILES: Dict[str, Profile] = {
    "default": DEFAULT,
    "preview": PREVIEW,
}
