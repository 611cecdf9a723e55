"""Error types raised by the skill matching core."""


class ConfigurationError(ValueError):
    """Invalid parameters supplied by the integrating application."""


class StoreUnavailable(RuntimeError):
    """The taxonomy store could not be reached or queried."""


class MalformedExtractionOutput(ValueError):
    """Extraction collaborator output is not the expected JSON object shape."""


class DuplicateSkillError(ValueError):
    """A skill with the same normalized name already exists."""


class AmbiguousEquivalentError(ValueError):
    """An equivalent term collides with a different skill's canonical name."""
