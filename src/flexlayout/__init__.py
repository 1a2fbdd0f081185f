"""flexlayout — prioritized, multi-root template resolution for layout records."""

__version__ = "0.3.0"

from flexlayout.domain.errors import FlexLayoutError, TemplateLoadError  # noqa: E402
from flexlayout.domain.extensions import ExtensionPoint  # noqa: E402
from flexlayout.domain.loader import HostContext, TemplateContext  # noqa: E402
from flexlayout.services.layouts import LayoutService  # noqa: E402

__all__ = [
    "ExtensionPoint",
    "FlexLayoutError",
    "HostContext",
    "LayoutService",
    "TemplateContext",
    "TemplateLoadError",
    "__version__",
]
