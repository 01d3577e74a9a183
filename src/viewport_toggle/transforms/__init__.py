from viewport_toggle.transforms.base import Transform
from viewport_toggle.transforms.copy_units import CopyViewportToContainerUnits
from viewport_toggle.transforms.media_queries import MediaToContainerQueries
from viewport_toggle.transforms.toggle import TogglePass, ViewportToContainerToggle

__all__ = [
    "Transform",
    "ViewportToContainerToggle",
    "TogglePass",
    "MediaToContainerQueries",
    "CopyViewportToContainerUnits",
    "apply_transforms",
]


def apply_transforms(root, transforms=None):
    """Apply *transforms* in order to *root* (the toggle transform by default)."""
    if transforms is None:
        transforms = [ViewportToContainerToggle()]
    for t in transforms:
        root = t.apply(root)
    return root
