"""Admin user-management schemas."""

from pydantic import BaseModel

from canteen.schemas.auth import CAMEL_CONFIG


class UserFlagsUpdate(BaseModel):
    """Partial update of approval/admin flags; omitted fields stay unchanged."""

    is_approved: bool | None = None
    is_admin: bool | None = None

    model_config = CAMEL_CONFIG
