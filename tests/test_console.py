# Tests for erpsync.output.console
# Rich-based console output

from io import StringIO

from rich.console import Console as RichConsole

from erpsync.output.console import Console, ProgressDisplay, create_console
from erpsync.sync.catalog import EntityCatalog
from erpsync.sync.history import RunRecord
from erpsync.sync.job import JobMode, ProgressEvent
from erpsync.sync.result import ItemAction, ItemIssue, ResultStatus, SyncResult, SyncResultDetail


def _make_console(verbose: bool = False) -> Console:
    """Create a console with captured output."""
    console = Console(verbose=verbose, colored=False)
    console._console = RichConsole(file=StringIO(), no_color=True, width=200)
    return console


def _get_output(console: Console) -> str:
    """Get captured output from console."""
    console._console.file.seek(0)
    return console._console.file.read()


def _ok(key: str, message: str = "Imported successfully", detail=None) -> SyncResult:
    return SyncResult(entity_key=key, label=key.title(), status=ResultStatus.SUCCESS, message=message, detail=detail)


def _err(key: str, message: str = "network timeout") -> SyncResult:
    return SyncResult.from_error(key, key.title(), message)


class TestConsoleBasic:
    """Tests for basic console methods."""

    def test_print(self):
        c = _make_console()
        c.print("hello world")
        assert "hello world" in _get_output(c)

    def test_print_error(self):
        c = _make_console()
        c.print_error("something failed")
        output = _get_output(c)
        assert "Error:" in output
        assert "something failed" in output

    def test_print_warning(self):
        c = _make_console()
        c.print_warning("be careful")
        output = _get_output(c)
        assert "Warning:" in output
        assert "be careful" in output

    def test_print_success(self):
        c = _make_console()
        c.print_success("all good")
        assert "all good" in _get_output(c)

    def test_print_info(self):
        c = _make_console()
        c.print_info("fyi")
        assert "fyi" in _get_output(c)

    def test_create_console(self):
        c = create_console(verbose=True, colored=False)
        assert isinstance(c, Console)
        assert c.verbose is True


class TestEntities:
    """Tests for the entity table and job plan."""

    def test_enabled_only(self, catalog):
        c = _make_console()
        c.print_entities(catalog)
        output = _get_output(c)
        assert "countries" in output
        assert "Safe Transactions" in output
        assert "safes, clients, suppliers" in output

    def test_disabled_hidden_unless_all(self, default_config):
        default_config.entities["inventory"].enabled = False
        catalog = EntityCatalog.from_config(default_config)

        c = _make_console()
        c.print_entities(catalog)
        assert "inventory" not in _get_output(c)

        c = _make_console()
        c.print_entities(catalog, show_all=True)
        output = _get_output(c)
        assert "inventory" in output
        assert "disabled" in output

    def test_delete_plan(self, catalog):
        c = _make_console()
        c.print_plan(catalog, ["safe_transactions", "safes"], JobMode.DELETE)
        output = _get_output(c)
        assert "Delete order:" in output
        assert output.index("Safe Transactions") < output.index("Safes (safes)")


class TestResults:
    """Tests for per-entity results."""

    def test_success_and_error(self):
        c = _make_console()
        c.print_results([_ok("countries"), _err("products")])
        output = _get_output(c)
        assert "Import results" in output
        assert "✓ Countries - Imported successfully" in output
        assert "✗ Products - network timeout" in output

    def test_delete_heading(self):
        c = _make_console()
        c.print_results([_ok("safes", "Deleted successfully")], mode=JobMode.DELETE)
        assert "Delete results" in _get_output(c)

    def test_item_issues(self):
        detail = SyncResultDetail(
            items=(
                ItemIssue(id=3, action=ItemAction.FAILED, name="ACME Ltd", reason="missing country"),
                ItemIssue(id=7, action=ItemAction.SKIPPED, reason="duplicate"),
            )
        )
        c = _make_console()
        c.print_results([_ok("clients", detail=detail)])
        output = _get_output(c)
        assert "Failed (1):" in output
        assert "ID: 3 - ACME Ltd (missing country)" in output
        assert "Skipped (1):" in output
        assert "ID: 7 (duplicate)" in output

    def test_backend_text_with_closing_tag(self):
        c = _make_console()
        c.print_results([_err("clients", "Odoo error: bad value [/b] in field")])
        assert "Odoo error: bad value [/b] in field" in _get_output(c)

    def test_backend_text_with_brackets_kept(self):
        detail = SyncResultDetail(
            items=(
                ItemIssue(id=3, action=ItemAction.FAILED, name="[bold]ACME[/bold]", reason="bad vat [/red]"),
                ItemIssue(id=7, action=ItemAction.SKIPPED, reason="duplicate [ref]"),
            ),
            skipped_log=("Order [S001] skipped [/dim]",),
        )
        c = _make_console()
        c.print_results([_ok("clients", "Imported [3] of [4]", detail=detail)])
        output = _get_output(c)
        assert "Imported [3] of [4]" in output
        assert "ID: 3 - [bold]ACME[/bold] (bad vat [/red])" in output
        assert "ID: 7 (duplicate [ref])" in output
        assert "Order [S001] skipped [/dim]" in output

    def test_skipped_log_truncated(self):
        detail = SyncResultDetail(skipped_log=tuple(f"Order S{i:03d} skipped" for i in range(15)))
        c = _make_console()
        c.print_results([_ok("sales_deliveries", detail=detail)])
        output = _get_output(c)
        assert "Skipped orders (15):" in output
        assert "Order S009 skipped" in output
        assert "Order S010 skipped" not in output
        assert "5 more" in output

    def test_skipped_log_verbose(self):
        detail = SyncResultDetail(skipped_log=tuple(f"Order S{i:03d} skipped" for i in range(15)))
        c = _make_console(verbose=True)
        c.print_results([_ok("sales_deliveries", detail=detail)])
        output = _get_output(c)
        assert "Order S014 skipped" in output
        assert "more" not in output


class TestSummary:
    """Tests for the summary panel."""

    def test_success(self):
        c = _make_console()
        c.print_summary([_ok("countries"), _ok("users")])
        output = _get_output(c)
        assert "Summary: import success" in output
        assert "All 2 entities completed" in output

    def test_partial(self):
        c = _make_console()
        c.print_summary([_ok("countries"), _err("users")])
        output = _get_output(c)
        assert "Summary: import partial" in output
        assert "1 entities completed, 1 failed" in output

    def test_error(self):
        c = _make_console()
        c.print_summary([_err("countries")], mode=JobMode.DELETE)
        output = _get_output(c)
        assert "Summary: delete error" in output
        assert "All 1 entities failed" in output

    def test_dry_run(self):
        c = _make_console()
        c.print_summary([_ok("countries")], dry_run=True)
        assert "dry run" in _get_output(c)


class TestHistory:
    """Tests for the history table."""

    def test_empty(self):
        c = _make_console()
        c.print_history([])
        assert "No runs recorded" in _get_output(c)

    def test_runs(self):
        run = RunRecord(
            mode="import",
            started_at="2026-01-01T10:00:00",
            finished_at="2026-01-01T10:01:00",
            import_mode="update",
            results=[_ok("countries"), _err("products")],
        )
        c = _make_console()
        c.print_history([run])
        output = _get_output(c)
        assert "2026-01-01T10:00:00" in output
        assert "import (update)" in output
        assert "partial" in output
        assert "1/2" in output
        assert "products" in output


class TestConfirm:
    """Tests for the confirmation prompt."""

    def test_yes(self, monkeypatch):
        c = _make_console()
        monkeypatch.setattr("builtins.input", lambda *args: "y")
        assert c.confirm("Delete?") is True
        assert "[y/N]" in _get_output(c)

    def test_default(self, monkeypatch):
        c = _make_console()
        monkeypatch.setattr("builtins.input", lambda *args: "")
        assert c.confirm("Delete?", default=False) is False
        assert c.confirm("Delete?", default=True) is True

    def test_no(self, monkeypatch):
        c = _make_console()
        monkeypatch.setattr("builtins.input", lambda *args: "no")
        assert c.confirm("Delete?", default=True) is False


class TestProgressDisplay:
    """Tests for the progress bar adapter."""

    def test_updates_from_events(self):
        c = _make_console()
        with c.progress(2, description="Importing") as progress:
            assert isinstance(progress, ProgressDisplay)
            progress(ProgressEvent(current_index=2, total=2, current_entity_label="Clients", entity_key="clients"))
            task = progress._progress.tasks[0]
            assert task.completed == 1
            assert task.description == "Importing: Clients"
        assert progress._progress.tasks[0].completed == 2
