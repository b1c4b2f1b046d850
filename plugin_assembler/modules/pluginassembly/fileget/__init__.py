from .repository_downloader import RepositoryDownloader
from .resolver import ArtifactResolver

__all__ = ["ArtifactResolver", "RepositoryDownloader"]
