from lagom import Container, dependency_definition
from pymongo import MongoClient

from application.ports.blob_store import LocalBlobStore
from application.ports.file_catalog import FileCatalog
from application.ports.remote_tier import RemoteTier
from application.ports.repositories.file_state_ledger import FileStateLedger
from application.use_cases.cleaner_use_cases import CleanLocalFilesUseCase
from domain.value_objects.cleaner_policy import CleanerPolicy
from infrastructure.blob_stores.fsspec_blob_store import FsspecLocalBlobStore
from infrastructure.config import Settings, settings
from infrastructure.read_repositories.mongo_file_catalog import MongoFileCatalog
from infrastructure.remote_tiers.fsspec_remote_tier import FsspecRemoteTier
from infrastructure.repositories.mongo_file_state_ledger import MongoFileStateLedger


def create_container(app_settings: Settings | None = None) -> Container:
    app_settings = app_settings or settings
    container = Container()

    container[Settings] = app_settings

    container[CleanerPolicy] = CleanerPolicy(
        consistency_delay=app_settings.consistency_delay,
        delete_local=app_settings.delete_local,
        max_task_runtime=app_settings.max_task_runtime,
    )

    # One MongoDB client shared by the ledger and the catalog, created on first use
    @dependency_definition(container, singleton=True)
    def _mongo_client(c: Container) -> MongoClient:
        return MongoClient(c[Settings].mongo_uri, tz_aware=True)

    # Ledger and local file catalog
    container[FileStateLedger] = lambda c: MongoFileStateLedger(
        client=c[MongoClient],
        settings=c[Settings],
    )
    container[FileCatalog] = lambda c: MongoFileCatalog(
        client=c[MongoClient],
        settings=c[Settings],
    )

    # Storage tiers (fsspec)
    container[LocalBlobStore] = FsspecLocalBlobStore(
        base_url=app_settings.local_base_url,
        storage_options=app_settings.local_storage_options,
    )
    container[RemoteTier] = FsspecRemoteTier(
        base_url=app_settings.remote_base_url,
        storage_options=app_settings.remote_storage_options,
    )

    # Use cases
    container[CleanLocalFilesUseCase] = lambda c: CleanLocalFilesUseCase(
        ledger=c[FileStateLedger],
        catalog=c[FileCatalog],
        remote_tier=c[RemoteTier],
        local_store=c[LocalBlobStore],
        policy=c[CleanerPolicy],
    )

    return container
