from app.models.quote import InternationalQuote  # noqa: F401
from app.models.enums import MarginRate  # noqa: F401
