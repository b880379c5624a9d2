from .visit import VisitRecord
from .store import VisitStore, JsonFileBackend, MemoryBackend

store = VisitStore()
