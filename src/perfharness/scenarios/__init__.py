from .collection_checks import CollectionChecks, run_collection_checks

__all__ = ['CollectionChecks', 'run_collection_checks']
