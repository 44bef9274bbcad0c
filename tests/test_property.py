"""Property-based tests using Hypothesis.

These exercise invariants that must hold for any valid input:
- coordinate equivalence between index and letter columns
- inference is deterministic and classifies generated values correctly
- writes to a loaded sheet read back through the cache without remote reads
"""

from __future__ import annotations

from datetime import date, datetime

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st
from openpyxl.utils import get_column_letter

from gsx.contracts.cells import CellType
from gsx.contracts.options import WorkbookOptions
from gsx.engine.coords import normalize
from gsx.engine.inference import infer
from gsx.engine.workbook import Workbook

from conftest import FakeSession, FakeStore

# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------
rows = st.integers(min_value=1, max_value=1_000_000)
cols = st.integers(min_value=1, max_value=18278)

cell_text = st.one_of(
    st.text(max_size=20),
    st.from_regex(r"[0-9]{1,6}(\.[0-9]{0,4})?", fullmatch=True),
    st.from_regex(r"=[A-Z]{1,2}[0-9]{1,3}", fullmatch=True),
)

dates = st.dates(min_value=date(1900, 1, 1), max_value=date(2999, 12, 31))
datetimes = st.datetimes(min_value=datetime(1900, 1, 1), max_value=datetime(2999, 12, 31)).map(
    lambda d: d.replace(microsecond=0)
)


# ---------------------------------------------------------------------------
# Coordinates
# ---------------------------------------------------------------------------
class TestCoordinateEquivalence:
    @given(row=rows, col=cols)
    @settings(max_examples=200)
    def test_letter_and_index_agree(self, row: int, col: int) -> None:
        letters = get_column_letter(col)
        expected = (row, col)
        assert normalize(row, col) == expected
        assert normalize(row, letters) == expected
        assert normalize(row, letters.lower()) == expected
        assert normalize(letters, row) == expected

    @given(row=rows, col=cols)
    def test_idempotent(self, row: int, col: int) -> None:
        once = normalize(row, col)
        assert normalize(*once) == once


# ---------------------------------------------------------------------------
# Inference
# ---------------------------------------------------------------------------
class TestInference:
    @given(text=st.one_of(st.none(), cell_text), numeric=st.one_of(st.none(), cell_text))
    @settings(max_examples=200)
    def test_deterministic(self, text, numeric) -> None:
        assert infer(text, numeric) == infer(text, numeric)

    @given(text=cell_text)
    def test_formula_prefix_always_formula(self, text: str) -> None:
        assert infer("=" + text)[1] == CellType.formula

    @given(d=dates)
    def test_dates_classified(self, d: date) -> None:
        value, tag = infer(d.strftime("%d/%m/%Y"))
        assert tag == CellType.date
        assert value == d.strftime("%d/%m/%Y")

    @given(d=datetimes)
    def test_datetimes_classified(self, d: datetime) -> None:
        assert infer(d.strftime("%d/%m/%Y %H:%M:%S"))[1] == CellType.datetime

    @given(n=st.integers(min_value=0, max_value=10**9))
    def test_unsigned_integers_are_floats(self, n: int) -> None:
        assert infer(str(n)) == (float(n), CellType.float)

    @given(h=st.integers(0, 23), m=st.integers(0, 59), s=st.integers(0, 59))
    def test_times_to_seconds(self, h: int, m: int, s: int) -> None:
        assert infer(f"{h:02d}:{m:02d}:{s:02d}") == (h * 3600 + m * 60 + s, CellType.time)


# ---------------------------------------------------------------------------
# Write-then-read coherence
# ---------------------------------------------------------------------------
class TestWriteCoherence:
    @given(
        row=st.integers(1, 50),
        col=st.integers(1, 20),
        n=st.integers(min_value=0, max_value=10**6),
    )
    @settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_numeric_write_reads_back(self, row: int, col: int, n: int) -> None:
        store = FakeStore({"Sheet1": {(1, 1): ("seed", "seed")}})
        wb = Workbook("k", session=FakeSession(store), options=WorkbookOptions())
        wb.ensure_loaded()
        reads = store.reads()

        wb.set(row, col, str(n))

        assert wb.cell(row, col) == float(n)
        assert wb.celltype(row, col) == CellType.float
        assert store.reads() == reads

    @given(d=dates)
    @settings(max_examples=50)
    def test_date_write_reads_back(self, d: date) -> None:
        store = FakeStore({"Sheet1": {}})
        wb = Workbook("k", session=FakeSession(store), options=WorkbookOptions())
        wb.ensure_loaded()
        wb.set(1, 1, d)
        assert wb.cell(1, 1) == d
