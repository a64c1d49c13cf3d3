"""
Scene description parser.

Reads a JSON or YAML scene description with:
- Camera configuration
- Render settings
- Materials library
- Objects (spheres with materials)

Example scene file:
```yaml
camera:
  look_from: [13, 2, 3]
  look_at: [0, 0, 0]
  vfov: 20
  aperture: 0.1
  focus_dist: 10

render:
  width: 200
  height: 100
  samples: 10
  max_depth: 50

materials:
  ground:
    type: lambertian
    albedo: [0.5, 0.5, 0.5]

  glass:
    type: dielectric
    refractive_index: 1.5

objects:
  - type: sphere
    center: [0, -1000, 0]
    radius: 1000
    material: ground

  - type: sphere
    center: [0, 1, 0]
    radius: 1
    material: glass
```

YAML files need PyYAML (the ``yaml`` extra); JSON always works.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from .vec3 import Vec3, Point3, Color
from .camera import Camera
from .shapes import Sphere, Scene
from .materials import Material, Lambertian, Metal, Dielectric
from .renderer import RenderSettings

logger = logging.getLogger(__name__)


class SceneParseError(Exception):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.objects: Scene = Scene()
        self.camera: Optional[Camera] = None
        self.settings: Optional[RenderSettings] = None

    def parse_file(self, filepath: Union[str, Path]) -> Tuple[Scene, Camera, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (scene, camera, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text(encoding='utf-8')

        if path.suffix in ('.yaml', '.yml'):
            data = self._load_yaml(content)
        else:
            try:
                data = json.loads(content)
            except json.JSONDecodeError as e:
                raise SceneParseError(f"Invalid JSON in {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file must contain a mapping: {filepath}")

        logger.debug("Loaded scene description from %s", path)
        return self.parse_dict(data)

    @staticmethod
    def _load_yaml(content: str) -> Any:
        try:
            import yaml
        except ImportError:
            raise SceneParseError("PyYAML not installed. Install with: pip install pyyaml")
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise SceneParseError(f"Invalid YAML: {e}") from e

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[Scene, Camera, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, camera, settings)
        """
        _require_mapping(data, 'scene')

        # Render settings first; the camera's default aspect ratio follows them
        if 'render' in data:
            self._parse_settings(data['render'])
        else:
            self.settings = RenderSettings()

        # Parse materials before objects (objects reference them)
        if 'materials' in data:
            self._parse_materials(data['materials'])

        if 'objects' in data:
            self._parse_objects(data['objects'])

        self._parse_camera(data.get('camera') or {})

        logger.debug(
            "Parsed %d materials, %d objects", len(self.materials), len(self.objects)
        )
        return self.objects, self.camera, self.settings

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from a list or an x/y/z mapping."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
            return Vec3(*(_to_float(c, 'vector component') for c in data))
        elif isinstance(data, dict):
            return Vec3(*(_to_float(data.get(k, 0), 'vector component') for k in 'xyz'))
        else:
            raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from a list, an r/g/b mapping or a hex string."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Color must have 3 components, got {len(data)}")
            return Color(*(_to_float(c, 'color component') for c in data))
        elif isinstance(data, dict):
            return Color(*(_to_float(data.get(k, 0), 'color component') for k in 'rgb'))
        elif isinstance(data, str):
            if data.startswith('#') and len(data) == 7:
                try:
                    r, g, b = (int(data[i:i + 2], 16) / 255.0 for i in (1, 3, 5))
                except ValueError as e:
                    raise SceneParseError(f"Invalid hex color: {data}") from e
                return Color(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        else:
            raise SceneParseError(f"Cannot parse Color from: {data}")

    def _parse_material(self, mat_data: Any) -> Material:
        _require_mapping(mat_data, 'material')
        mat_type = str(mat_data.get('type', 'lambertian')).lower()

        if mat_type == 'lambertian':
            albedo = self._parse_color(mat_data.get('albedo', [0.5, 0.5, 0.5]))
            return Lambertian(albedo)

        elif mat_type == 'metal':
            albedo = self._parse_color(mat_data.get('albedo', [0.8, 0.8, 0.8]))
            fuzz = _to_float(mat_data.get('fuzz', 0.0), 'fuzz')
            return Metal(albedo, fuzz)

        elif mat_type == 'dielectric':
            refractive_index = _to_float(mat_data.get('refractive_index', 1.5), 'refractive_index')
            return Dielectric(refractive_index)

        raise SceneParseError(f"Unknown material type: {mat_type}")

    def _parse_materials(self, materials_data: Any) -> None:
        """Parse materials section."""
        _require_mapping(materials_data, 'materials')
        for name, mat_data in materials_data.items():
            self.materials[name] = self._parse_material(mat_data)

    def _get_material(self, mat_ref: Any) -> Optional[Material]:
        """Get a material by name or inline definition."""
        if mat_ref is None:
            return None
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        elif isinstance(mat_ref, dict):
            return self._parse_material(mat_ref)
        else:
            raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_objects(self, objects_data: Any) -> None:
        """Parse objects section."""
        if not isinstance(objects_data, list):
            raise SceneParseError(f"'objects' must be a list, got {type(objects_data).__name__}")

        for obj_data in objects_data:
            _require_mapping(obj_data, 'object')
            obj_type = str(obj_data.get('type', 'sphere')).lower()
            if obj_type != 'sphere':
                raise SceneParseError(f"Unknown object type: {obj_type}")

            material = self._get_material(obj_data.get('material'))
            center = self._parse_vec3(obj_data.get('center', [0, 0, 0]))
            radius = _to_float(obj_data.get('radius', 1.0), 'radius')
            self.objects.add(Sphere(center, radius, material))

    def _parse_camera(self, camera_data: Any) -> None:
        """Parse camera section."""
        _require_mapping(camera_data, 'camera')
        look_from = self._parse_vec3(camera_data.get('look_from', [0, 0, 0]))
        look_at = self._parse_vec3(camera_data.get('look_at', [0, 0, -1]))
        vup = self._parse_vec3(camera_data.get('vup', [0, 1, 0]))
        vfov = _to_float(camera_data.get('vfov', 90), 'vfov')
        aspect_ratio = _to_float(
            camera_data.get('aspect_ratio', self.settings.aspect_ratio), 'aspect_ratio'
        )
        aperture = _to_float(camera_data.get('aperture', 0.0), 'aperture')
        focus_dist = _to_float(camera_data.get('focus_dist', 1.0), 'focus_dist')

        self.camera = Camera(
            look_from=look_from,
            look_at=look_at,
            vup=vup,
            vfov=vfov,
            aspect_ratio=aspect_ratio,
            aperture=aperture,
            focus_dist=focus_dist
        )

    def _parse_settings(self, settings_data: Any) -> None:
        """Parse render settings section."""
        _require_mapping(settings_data, 'render')
        width = _to_int(settings_data.get('width', 200), 'width')
        height = _to_int(settings_data.get('height', 100), 'height')
        samples = _to_int(settings_data.get('samples', 10), 'samples')
        for key, value in (('width', width), ('height', height), ('samples', samples)):
            if value <= 0:
                raise SceneParseError(f"'{key}' must be positive, got {value}")

        seed = settings_data.get('seed')
        self.settings = RenderSettings(
            width=width,
            height=height,
            samples_per_pixel=samples,
            max_depth=_to_int(settings_data.get('max_depth', 50), 'max_depth'),
            seed=_to_int(seed, 'seed') if seed is not None else None
        )


def _require_mapping(data: Any, what: str) -> None:
    if not isinstance(data, dict):
        raise SceneParseError(f"{what} must be a mapping, got {type(data).__name__}")


def _to_float(value: Any, what: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise SceneParseError(f"Invalid {what}: {value!r}") from e


def _to_int(value: Any, what: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise SceneParseError(f"Invalid {what}: {value!r}") from e


def load_scene(filepath: Union[str, Path]) -> Tuple[Scene, Camera, RenderSettings]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (scene, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[Scene, Camera, RenderSettings]:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (scene, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_dict(data)
