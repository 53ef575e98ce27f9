"""
Scene state shared by gesture control, pointer control and the HUD.

Holds transforms only; drawing belongs to the host renderer.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import SceneConfig

logger = logging.getLogger(__name__)


@dataclass
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def set(self, x: float, y: float, z: float) -> None:
        self.x, self.y, self.z = x, y, z


@dataclass
class Camera:
    """Perspective camera looking at the origin along -z."""
    position: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, 5.0))


@dataclass
class Model:
    """One subject in the catalogue."""
    name: str
    title: str
    description: str
    rotation: Vector3 = field(default_factory=Vector3)
    visible: bool = False


def default_catalogue() -> List[Model]:
    return [
        Model("earth", "Earth",
              "Our home planet, the third from the Sun. The only known celestial body to harbor life."),
        Model("blackhole", "Black Hole",
              "A region of spacetime where gravity is so strong that nothing can escape from it."),
        Model("human-body", "Human Body",
              "A complex biological system with trillions of cells working in harmony."),
        Model("supernova", "Supernova",
              "A powerful and luminous stellar explosion that occurs at the end of a star's life."),
        Model("galaxy", "Milky Way Galaxy",
              "Our home galaxy, a barred spiral galaxy containing 100-400 billion stars."),
    ]


class ModelRegistry:
    """
    Catalogue of models with exactly one visible at a time.

    Gesture and pointer control only touch the active model.
    """

    def __init__(self, cfg: SceneConfig, models: Optional[List[Model]] = None):
        self.cfg = cfg
        self.models: Dict[str, Model] = {m.name: m for m in (models or default_catalogue())}
        if cfg.default_model not in self.models:
            raise KeyError(f"Unknown default model: {cfg.default_model}")
        self.current = cfg.default_model
        self.auto_rotate = cfg.auto_rotate
        for name, model in self.models.items():
            model.visible = name == self.current

    @property
    def names(self) -> List[str]:
        return list(self.models)

    @property
    def active(self) -> Model:
        return self.models[self.current]

    def switch_model(self, name: str, camera: Optional[Camera] = None) -> bool:
        """
        Make another model the visible one.

        Returns:
            False if it was already active
        """
        if name == self.current:
            return False
        if name not in self.models:
            raise KeyError(f"Unknown model: {name}")

        self.active.visible = False
        self.current = name
        self.active.visible = True
        logger.info(f"Switched to model '{name}'")

        if camera is not None:
            self.reset_view(camera)
        return True

    def reset_view(self, camera: Camera) -> None:
        """Put the camera back at its starting distance."""
        camera.position.set(0.0, 0.0, self.cfg.camera_z)

    def toggle_auto_rotate(self) -> bool:
        self.auto_rotate = not self.auto_rotate
        return self.auto_rotate

    def advance_frame(self) -> None:
        """Per-frame scene update."""
        if self.auto_rotate:
            self.active.rotation.y += self.cfg.auto_rotate_speed
