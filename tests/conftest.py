from __future__ import annotations

import pytest

from src.writer_desk.writer_desk.stats.reconciler import WriterStatsReconciler

from fakes import Store, make_student, make_writer


@pytest.fixture
def store() -> Store:
    return Store(students=[make_student()], writers=[make_writer(1), make_writer(2)])


@pytest.fixture
def reconciler(store: Store) -> WriterStatsReconciler:
    return WriterStatsReconciler(store.assignments, store.writers)
