"""
Render configuration for the PRG viewer.
Simple, clean configuration system with a few presets.
"""
from dataclasses import asdict, dataclass
import json
import logging
from core.markup import DEFAULT_LINE_THICKNESS, RenderOptions
from utils.errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class RenderConfig:
    """Output size and stroke settings for SVG rendering."""
    name: str = "screen"

    # Output size in pixels
    width: float = 800
    height: float = 600

    # Printing stroke width in program units
    line_thickness: float = DEFAULT_LINE_THICKNESS

    def __post_init__(self):
        self.validate()

    def validate(self):
        for attr in ("width", "height", "line_thickness"):
            value = getattr(self, attr)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{attr} must be a number, got {value!r}")
            if value <= 0:
                raise ConfigError(f"{attr} must be positive, got {value}")

    def to_options(self) -> RenderOptions:
        return RenderOptions(self.width, self.height, self.line_thickness)


class ConfigManager:
    """Manages render configurations with simple presets."""

    @staticmethod
    def screen() -> RenderConfig:
        """Default on-screen preview."""
        return RenderConfig()

    @staticmethod
    def large() -> RenderConfig:
        """Large preview for detailed inspection."""
        return RenderConfig(name="large", width=1600, height=1200, line_thickness=0.05)

    @staticmethod
    def fine() -> RenderConfig:
        """Thin strokes for dense, small-feature programs."""
        return RenderConfig(name="fine", width=800, height=600, line_thickness=0.01)

    @staticmethod
    def preset_names():
        return ["screen", "large", "fine"]

    @staticmethod
    def get_config(name: str) -> RenderConfig:
        """Get configuration by preset name."""
        configs = {
            "screen": ConfigManager.screen,
            "large": ConfigManager.large,
            "fine": ConfigManager.fine,
        }
        factory = configs.get(name.lower())
        if factory is None:
            logger.warning("Unknown render preset %r, using 'screen'", name)
            factory = ConfigManager.screen
        return factory()

    @staticmethod
    def save_config(config: RenderConfig, filepath: str):
        """Save configuration to JSON file."""
        with open(filepath, 'w') as f:
            json.dump(asdict(config), f, indent=2)

    @staticmethod
    def load_config(filepath: str) -> RenderConfig:
        """Load configuration from JSON file, falling back to the screen preset."""
        try:
            with open(filepath, 'r') as f:
                data = json.load(f)
            return RenderConfig(**data)

        except (OSError, ValueError, TypeError) as e:
            logger.warning("Could not load render config %s: %s", filepath, e)
            return ConfigManager.screen()
