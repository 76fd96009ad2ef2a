"""Blueprint Parser - JSON text to a validated Blueprint."""

from pydantic import ValidationError

from ..core import get_logger, get_settings
from ..core.errors import MalformedImport
from ..core.json import decode_object, validate_json_depth, validate_json_size, JSONParseError
from .schema import Blueprint

logger = get_logger(__name__)

MAX_BLUEPRINT_DEPTH = 40


class BlueprintParser:
    """Parses blueprint documents; every problem surfaces as MalformedImport."""

    def __init__(self, max_size: int | None = None) -> None:
        self.max_size = max_size if max_size is not None else get_settings().max_blueprint_size

    def parse(self, content: str) -> Blueprint:
        """
        Parse blueprint JSON text.

        Args:
            content: Blueprint JSON string

        Returns:
            Validated blueprint

        Raises:
            MalformedImport: If the text is not JSON or misses required fields
        """
        if not isinstance(content, str) or not content.strip():
            raise MalformedImport("Blueprint is empty")

        # The whole text must be the object; no repair, no prose or fences
        try:
            validate_json_size(content, self.max_size, "Blueprint")
            data = decode_object(content)
            validate_json_depth(data, MAX_BLUEPRINT_DEPTH)
        except JSONParseError as e:
            logger.error("json_parse_failed", error=str(e))
            raise MalformedImport(f"Invalid blueprint JSON: {e}", e) from e

        try:
            blueprint = Blueprint.model_validate(data)
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"]) or "blueprint"
            logger.error("blueprint_invalid", field=location, error=first["msg"])
            raise MalformedImport(f"Invalid blueprint at '{location}': {first['msg']}", e) from e

        logger.info(
            "blueprint_parsed",
            app=blueprint.app_name,
            version=blueprint.schema_version,
            screens=len(blueprint.screens),
        )
        return blueprint


def parse_blueprint(content: str) -> Blueprint:
    """
    Convenience function to parse blueprint content

    Args:
        content: Blueprint JSON string

    Returns:
        Validated blueprint
    """
    parser = BlueprintParser()
    return parser.parse(content)
