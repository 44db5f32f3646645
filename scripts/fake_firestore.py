"""In-memory stand-in for the Firestore client used by the store tests."""
import copy
import itertools

from google.cloud.firestore import And, FieldFilter

_ids = itertools.count(1)

_OPS = {
    "==": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
    ">": lambda a, b: a is not None and a > b,
    ">=": lambda a, b: a is not None and a >= b,
    "<": lambda a, b: a is not None and a < b,
    "<=": lambda a, b: a is not None and a <= b,
    "in": lambda a, b: a in b,
}


def _matches(data, flt):
    if isinstance(flt, And):
        return all(_matches(data, f) for f in flt.filters)
    if isinstance(flt, FieldFilter):
        return _OPS[flt.op_string](data.get(flt.field_path), flt.value)
    raise TypeError(f"unsupported filter {flt!r}")


class FakeSnapshot:
    def __init__(self, ref, data):
        self.reference = ref
        self.id = ref.id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return copy.deepcopy(self._data) if self._data is not None else None


class FakeDocRef:
    def __init__(self, store, doc_id):
        self._store = store
        self.id = doc_id

    def get(self):
        return FakeSnapshot(self, self._store.get(self.id))

    def set(self, data, merge=False):
        if merge and self.id in self._store:
            self._store[self.id].update(copy.deepcopy(data))
        else:
            self._store[self.id] = copy.deepcopy(data)

    def update(self, data):
        if self.id not in self._store:
            raise KeyError(f"No document to update: {self.id}")
        self._store[self.id].update(copy.deepcopy(data))

    def delete(self):
        self._store.pop(self.id, None)


class FakeQuery:
    def __init__(self, store, filters=()):
        self._store = store
        self._filters = list(filters)

    def where(self, filter=None):
        return FakeQuery(self._store, self._filters + [filter])

    def stream(self):
        for doc_id, data in list(self._store.items()):
            if all(_matches(data, f) for f in self._filters):
                yield FakeSnapshot(FakeDocRef(self._store, doc_id), copy.deepcopy(data))

    def get(self):
        return list(self.stream())


class FakeCollection(FakeQuery):
    def __init__(self, store):
        super().__init__(store)

    def document(self, doc_id=None):
        return FakeDocRef(self._store, doc_id or f"doc{next(_ids)}")

    def add(self, data):
        ref = self.document()
        ref.set(data)
        return None, ref


class FakeFirestore:
    def __init__(self):
        self.collections = {}

    def collection(self, name):
        return FakeCollection(self.collections.setdefault(name, {}))

    def docs(self, name):
        """Raw documents of a collection, for assertions."""
        return self.collections.get(name, {})


class FailingFirestore:
    """Every collection access raises, like an unreachable backend."""

    def collection(self, name):
        raise RuntimeError("firestore unavailable")
