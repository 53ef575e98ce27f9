"""
Configuration management for the gesture-controlled visualizer.
"""
import os
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass


CONFIG_ENV_VAR = "COSMIC_GESTURES_CONFIG"
DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int
    width: int
    height: int
    fps: int
    mirror: bool


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int
    model_complexity: int
    min_detection_confidence: float
    min_tracking_confidence: float


@dataclass
class GesturesConfig:
    """Gesture state machine thresholds, in landmark pixel units."""
    rotate_deadzone_px: float
    pinch_threshold_px: float
    pinch_exit_threshold_px: Optional[float]  # None = same as pinch_threshold_px

    @property
    def pinch_exit_px(self) -> float:
        if self.pinch_exit_threshold_px is None:
            return self.pinch_threshold_px
        return self.pinch_exit_threshold_px


@dataclass
class ControlConfig:
    """Gesture-to-transform gains and limits."""
    rotation_gain: float
    zoom_gain: float
    zoom_min: float
    zoom_max: float
    indicator_pulse_ms: int


@dataclass
class PointerConfig:
    """Mouse fallback control settings."""
    rotate_speed: float
    zoom_speed: float
    drag_gain: float
    wheel_step: float


@dataclass
class SceneConfig:
    """Initial scene settings."""
    default_model: str
    camera_z: float
    auto_rotate: bool
    auto_rotate_speed: float


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_landmarks: bool
    show_gizmo: bool
    window_name: str


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str
    log_to_file: bool
    filename: str
    max_bytes: int
    backup_count: int


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig
    mediapipe: MediaPipeConfig
    gestures: GesturesConfig
    control: ControlConfig
    pointer: PointerConfig
    scene: SceneConfig
    display: DisplayConfig
    logging: LoggingConfig


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses $COSMIC_GESTURES_CONFIG or
            the config.default.yaml bundled with the package

    Returns:
        Configuration object with all settings
    """
    if path is None:
        path = os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)

    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    camera_data = data['camera']
    camera = CameraConfig(
        index=camera_data['index'],
        width=camera_data['width'],
        height=camera_data['height'],
        fps=camera_data['fps'],
        mirror=camera_data['mirror']
    )

    mp_data = data['mediapipe']
    mediapipe = MediaPipeConfig(
        max_num_hands=mp_data['max_num_hands'],
        model_complexity=mp_data['model_complexity'],
        min_detection_confidence=mp_data['min_detection_confidence'],
        min_tracking_confidence=mp_data['min_tracking_confidence']
    )

    gestures_data = data['gestures']
    gestures = GesturesConfig(
        rotate_deadzone_px=float(gestures_data['rotate_deadzone_px']),
        pinch_threshold_px=float(gestures_data['pinch_threshold_px']),
        pinch_exit_threshold_px=gestures_data.get('pinch_exit_threshold_px')
    )
    if gestures.pinch_exit_px < gestures.pinch_threshold_px:
        raise ValueError("gestures.pinch_exit_threshold_px must not be below gestures.pinch_threshold_px")

    control_data = data['control']
    control = ControlConfig(
        rotation_gain=control_data['rotation_gain'],
        zoom_gain=control_data['zoom_gain'],
        zoom_min=control_data['zoom_min'],
        zoom_max=control_data['zoom_max'],
        indicator_pulse_ms=control_data['indicator_pulse_ms']
    )
    if control.zoom_min > control.zoom_max:
        raise ValueError(f"control.zoom_min ({control.zoom_min}) exceeds control.zoom_max ({control.zoom_max})")

    pointer_data = data['pointer']
    pointer = PointerConfig(
        rotate_speed=pointer_data['rotate_speed'],
        zoom_speed=pointer_data['zoom_speed'],
        drag_gain=pointer_data['drag_gain'],
        wheel_step=pointer_data['wheel_step']
    )

    scene_data = data['scene']
    scene = SceneConfig(
        default_model=scene_data['default_model'],
        camera_z=scene_data['camera_z'],
        auto_rotate=scene_data['auto_rotate'],
        auto_rotate_speed=scene_data['auto_rotate_speed']
    )

    display_data = data['display']
    display = DisplayConfig(
        show_landmarks=display_data['show_landmarks'],
        show_gizmo=display_data['show_gizmo'],
        window_name=display_data['window_name']
    )

    logging_data = data['logging']
    logging_cfg = LoggingConfig(
        level=logging_data['level'],
        log_to_file=logging_data['log_to_file'],
        filename=logging_data['filename'],
        max_bytes=logging_data['max_bytes'],
        backup_count=logging_data['backup_count']
    )

    return Cfg(
        camera=camera,
        mediapipe=mediapipe,
        gestures=gestures,
        control=control,
        pointer=pointer,
        scene=scene,
        display=display,
        logging=logging_cfg
    )
