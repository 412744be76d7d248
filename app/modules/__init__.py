"""Domain modules package."""

from app.modules.booking import models as booking_models  # noqa: F401
from app.modules.identity import models as identity_models  # noqa: F401
from app.modules.listings import models as listings_models  # noqa: F401
