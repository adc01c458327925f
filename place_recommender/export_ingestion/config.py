from dataclasses import dataclass


@dataclass(frozen=True)
class ExportConfig:
    """
    Configuration for reading saved-places exports.
    """

    features_key: str = "features"
    max_profile_names: int = 100


DEFAULT_EXPORT_CONFIG = ExportConfig()
