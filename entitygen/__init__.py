"""Turn a parsed class model into entity descriptors for code generation."""
from entitygen.entities.creator import EntityCreator, create_entities

__version__ = "0.1.0"

__all__ = ["EntityCreator", "create_entities", "__version__"]
