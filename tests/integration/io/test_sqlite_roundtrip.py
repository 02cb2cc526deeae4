"""
Integration tests running every operation against a temporary SQLite file.
"""

import threading
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from sqlrow import (
    Handle,
    NotFoundError,
    PrimaryKeyOverflowError,
    SqlRowError,
    StatementCancelledError,
    StatementOptions,
)
from sqlrow.io.database.connection import SQLAlchemyConnection
from sqlrow.io.database.key_resolver import resolve_primary_key
from sqlrow.infrastructure.models import read_row
from sqlrow.infrastructure.sql.operations import InsertBuilder
from tests.fixtures.models import AnnualReport, AuditEntry, Company, Person, Ticker, Tiny

pytestmark = pytest.mark.integration

COMPANIES = [
    ("IBM", "IBM"),
    ("Intel", "INTC"),
    ("Apple", "AAPL"),
]


@pytest.fixture
def companies(handle):
    handle.create_table(Company())
    keys = []
    for name, ticker in COMPANIES:
        keys.append(handle.insert(Company(name=name, ticker=ticker)).value)
    return keys


def count_rows(engine, table):
    with engine.connect() as conn:
        return conn.exec_driver_sql(f"SELECT COUNT(*) FROM {table}").scalar()


class TestCrud:
    """Create, insert, get, update and delete on one table."""

    def test_insert_returns_generated_keys(self, companies):
        assert companies == [1, 2, 3]

    def test_get(self, handle, companies):
        company = Company(id=companies[1])

        handle.get(company)

        assert (company.name, company.ticker) == ("Intel", "INTC")

    def test_get_missing(self, handle, companies):
        with pytest.raises(NotFoundError) as exc_info:
            handle.get(Company(id=999))
        assert exc_info.value.key == 999

    def test_update(self, handle, companies):
        handle.update(Company(companies[0], "International Business Machines", "IBM"))

        company = Company(id=companies[0])
        handle.get(company)
        assert company.name == "International Business Machines"

    def test_update_missing(self, handle, companies):
        with pytest.raises(NotFoundError):
            handle.update(Company(999, "Nobody", "NONE"))

    def test_delete(self, handle, companies):
        handle.delete(Company(id=companies[2]))

        with pytest.raises(NotFoundError):
            handle.get(Company(id=companies[2]))

    def test_delete_missing_is_not_an_error(self, handle, companies):
        handle.delete(Company(id=999))

        assert len(handle.select(Company)) == 3

    def test_drop_table(self, handle, companies):
        handle.drop_table(Company())

        with pytest.raises(OperationalError):
            handle.select(Company)

    def test_logs_statements(self, handle, sql_logger, companies):
        logged = [c.kwargs["sql"] for c in sql_logger.debug.call_args_list]

        assert logged[0].startswith("CREATE TABLE company")
        assert "INSERT INTO company (Name,Ticker) VALUES (?,?)" in logged


class TestSelect:
    """Select with symbolic parameters."""

    def test_select_all(self, handle, companies):
        names = [c.name for c in handle.select(Company, "ORDER BY ID")]

        assert names == ["IBM", "Intel", "Apple"]

    def test_named_parameters_with_repeats(self, handle, companies):
        results = handle.select(
            Company,
            "WHERE Ticker != @ticker AND ID != @id AND ID > @id ORDER BY ID",
            {"ticker": "INTC", "id": 0},
        )

        assert [c.ticker for c in results] == ["IBM", "AAPL"]

    def test_named_helper(self, handle, companies):
        results = handle.select(Company, "WHERE Ticker = @ticker", Handle.named("ticker", "AAPL"))

        assert [c.name for c in results] == ["Apple"]

    def test_no_match(self, handle, companies):
        assert handle.select(Company, "WHERE Name = @name", {"name": "Nobody"}) == []

    def test_custom_prefix(self, sqlite_engine, companies):
        colon_handle = Handle(sqlite_engine, named_arg_prefix=":", sql_logger=MagicMock())

        results = colon_handle.select(Company, "WHERE Name = :name", {"name": "Intel"})

        assert [c.ticker for c in results] == ["INTC"]

    def test_new_func(self, handle, companies):
        created = []

        def new_company():
            company = Company()
            created.append(company)
            return company

        results = handle.select(
            object, "ORDER BY ID", options=StatementOptions(new_func=new_company)
        )

        assert len(results) == 3
        assert all(r in created for r in results)

    def test_cancelled_select(self, handle, companies):
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(StatementCancelledError):
            handle.select(Company, options=StatementOptions(cancel=cancel))


class TestColumnKinds:
    """Big numbers, blobs, explicit keys and narrow keys."""

    def test_big_number_and_blob_roundtrip(self, handle):
        handle.create_table(AnnualReport())
        report = AnnualReport(
            company_id=1, year=2015, sales=10**22, net_income=-123456789012345678
        )

        pk = handle.insert(report)
        loaded = AnnualReport(id=pk.value)
        handle.get(loaded)

        assert loaded.year == 2015
        assert loaded.sales == 10**22
        assert loaded.net_income == -123456789012345678

    def test_empty_big_number_and_blob(self, handle):
        handle.create_table(AnnualReport())
        pk = handle.insert(AnnualReport(company_id=1, year=2016))

        loaded = AnnualReport(id=pk.value)
        handle.get(loaded)

        assert loaded.sales is None
        assert loaded.net_income is None

    def test_explicit_key(self, handle):
        handle.create_table(Ticker())

        pk = handle.insert(Ticker("IBM", "NYSE"))
        loaded = Ticker(symbol="IBM")
        handle.get(loaded)

        assert pk.value == "IBM"
        assert loaded.exchange == "NYSE"

    def test_no_primary_key(self, handle):
        handle.create_table(AuditEntry())

        assert handle.insert(AuditEntry("started")) is None
        assert [e.message for e in handle.select(AuditEntry)] == ["started"]

    def test_narrow_key_overflow(self, handle, sqlite_engine):
        handle.create_table(Tiny())
        with sqlite_engine.begin() as conn:
            conn.exec_driver_sql("INSERT INTO tiny (id, label) VALUES (299, 'seed')")

        with pytest.raises(PrimaryKeyOverflowError) as exc_info:
            handle.insert(Tiny(label="next"))
        assert exc_info.value.value == 300

    def test_overflowed_insert_is_kept(self, handle, sqlite_engine):
        """Outside a transaction the row stays even though insert raised."""
        handle.create_table(Tiny())
        with sqlite_engine.begin() as conn:
            conn.exec_driver_sql("INSERT INTO tiny (id, label) VALUES (299, 'seed')")

        with pytest.raises(PrimaryKeyOverflowError):
            handle.insert(Tiny(label="next"))

        assert count_rows(sqlite_engine, "tiny") == 2


class TestKeyFallback:
    """The lookup query agrees with the driver-reported id."""

    def test_fallback_matches_last_insert_id(self, handle, sqlite_engine):
        handle.create_table(Person())
        handle.insert(Person(first="Ada", last="Lovelace"))
        person = Person(first="Alan", last="Turing")
        reported = handle.insert(person)

        table, row = read_row(person, handle.row_config)
        no_id = MagicMock()
        no_id.last_insert_id.return_value = None
        with sqlite_engine.connect() as raw:
            conn = SQLAlchemyConnection(raw, MagicMock())
            looked_up = resolve_primary_key(conn, handle.dialect, table, row, no_id)

        assert looked_up.value == reported.value == 2

    def test_fallback_with_null_column(self, handle, sqlite_engine):
        """NULL columns are left out of the lookup, so the row is still found."""
        handle.create_table(Company())
        company = Company(name="Acme", ticker=None)
        reported = handle.insert(company)

        table, row = read_row(company, handle.row_config)
        no_id = MagicMock()
        no_id.last_insert_id.return_value = None
        with sqlite_engine.connect() as raw:
            conn = SQLAlchemyConnection(raw, MagicMock())
            looked_up = resolve_primary_key(conn, handle.dialect, table, row, no_id)

        assert looked_up.value == reported.value == 1

    def test_fallback_inside_transaction(self, handle):
        handle.create_table(Person())

        tx = handle.begin()
        person = Person(first="Grace", last="Hopper")
        table, row = read_row(person, tx.row_config)
        statement = InsertBuilder(tx.dialect).insert(table, row)
        with tx._connection() as conn:
            conn.execute(statement.sql, statement.args)
            no_id = MagicMock()
            no_id.last_insert_id.return_value = None
            pk = resolve_primary_key(conn, tx.dialect, table, row, no_id)
        tx.commit()

        loaded = Person(id=pk.value)
        handle.get(loaded)
        assert loaded.last == "Hopper"


class TestTransactions:
    """Commit, rollback and the context manager."""

    @pytest.fixture(autouse=True)
    def _tables(self, handle):
        handle.create_table(Company())

    def test_commit(self, handle):
        tx = handle.begin()
        pk = tx.insert(Company(name="IBM", ticker="IBM"))
        tx.commit()

        assert tx.finished
        company = Company(id=pk.value)
        handle.get(company)
        assert company.name == "IBM"

    def test_rollback(self, handle):
        tx = handle.begin()
        tx.insert(Company(name="IBM", ticker="IBM"))
        tx.rollback()

        assert handle.select(Company) == []

    def test_reads_own_writes(self, handle):
        tx = handle.begin()
        pk = tx.insert(Company(name="IBM", ticker="IBM"))
        company = Company(id=pk.value)
        tx.get(company)
        tx.rollback()

        assert company.ticker == "IBM"

    def test_context_manager_commits(self, handle):
        with handle.begin() as tx:
            tx.insert(Company(name="IBM", ticker="IBM"))
            tx.insert(Company(name="Intel", ticker="INTC"))

        assert len(handle.select(Company)) == 2

    def test_context_manager_rolls_back_on_error(self, handle):
        with pytest.raises(RuntimeError):
            with handle.begin() as tx:
                tx.insert(Company(name="IBM", ticker="IBM"))
                raise RuntimeError("boom")

        assert handle.select(Company) == []

    def test_unusable_after_commit(self, handle):
        tx = handle.begin()
        tx.commit()

        with pytest.raises(SqlRowError, match="already committed"):
            tx.insert(Company(name="IBM", ticker="IBM"))

    def test_logs_transaction_boundaries(self, handle, sql_logger):
        with handle.begin() as tx:
            tx.select(Company)

        boundaries = [
            c.kwargs["sql"]
            for c in sql_logger.debug.call_args_list
            if c.args[0] == "sql.transaction"
        ]
        assert boundaries == ["BEGIN", "COMMIT"]

    def test_transaction_handle(self, handle):
        with handle.begin() as tx:
            assert tx.handle is handle
            assert tx.dialect is handle.dialect

    def test_rollback_undoes_overflowed_insert(self, handle, sqlite_engine):
        """Only an explicit rollback removes a row whose key overflowed."""
        handle.create_table(Tiny())
        with sqlite_engine.begin() as conn:
            conn.exec_driver_sql("INSERT INTO tiny (id, label) VALUES (299, 'seed')")

        tx = handle.begin()
        with pytest.raises(PrimaryKeyOverflowError):
            tx.insert(Tiny(label="next"))
        tx.rollback()

        assert count_rows(sqlite_engine, "tiny") == 1

    def test_inherits_default_options(self, sqlite_engine, sql_logger):
        cancel = threading.Event()
        handle = Handle(
            sqlite_engine,
            sql_logger=sql_logger,
            default_options=StatementOptions(cancel=cancel),
        )
        tx = handle.begin()
        try:
            assert tx.default_options is handle.default_options
            cancel.set()
            with pytest.raises(StatementCancelledError):
                tx.select(Company)
        finally:
            tx.rollback()
