from .bundle import unpack_embedded_bundle
from .collector import collect_resources
from .copier import copy_flat, prune_stale_plugins
from .expander import expand_archive, expand_classified_zips, extract_tar_gz, extract_zip
from .fs import find_all, find_first, name_predicate, safe_target
from .inventory import inventory_plugins
from .renamer import normalize_names

__all__ = [
    "collect_resources",
    "copy_flat",
    "expand_archive",
    "expand_classified_zips",
    "extract_tar_gz",
    "extract_zip",
    "find_all",
    "find_first",
    "inventory_plugins",
    "name_predicate",
    "normalize_names",
    "prune_stale_plugins",
    "safe_target",
    "unpack_embedded_bundle",
]
