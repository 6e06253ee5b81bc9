"""Unit tests for TaskFormController."""

from __future__ import annotations

import asyncio

import pytest

from tasklist.controller import BUSY_MESSAGE, DELETE_PROMPT, TaskFormController
from tasklist.providers import Draft, FormState, Task
from tasklist.rules import is_high_cost

from .fakes import FakeConfirm, FakeTaskAPI


@pytest.fixture
def seeded_api() -> FakeTaskAPI:
    return FakeTaskAPI(
        [
            Task(id=1, name="Buy paint", cost="80.00", deadline="2025-02-10"),
            Task(id=2, name="Fix roof", cost="2500.00", deadline="2025-03-01"),
            Task(id=3, name="Clean gutters", cost="150.00", deadline="2025-04-15"),
        ]
    )


def _controller(api: FakeTaskAPI, answer: bool = True) -> TaskFormController:
    return TaskFormController(api, FakeConfirm(answer))


class TestRefresh:
    """Tests for refresh()."""

    @pytest.mark.asyncio
    async def test_replaces_cache(self, seeded_api: FakeTaskAPI) -> None:
        controller = _controller(seeded_api)

        result = await controller.refresh()

        assert result.ok
        assert [t.id for t in controller.tasks] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_cache(self, seeded_api: FakeTaskAPI) -> None:
        controller = _controller(seeded_api)
        await controller.refresh()
        seeded_api.fail_on.add("list")

        result = await controller.refresh()

        assert not result.ok
        assert result.error == "list failed"
        assert controller.last_error == "list failed"
        assert [t.id for t in controller.tasks] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_success_clears_last_error(self, seeded_api: FakeTaskAPI) -> None:
        controller = _controller(seeded_api)
        seeded_api.fail_on.add("list")
        await controller.refresh()
        seeded_api.fail_on.clear()

        await controller.refresh()

        assert controller.last_error is None
        assert not controller.busy


class TestDraftLifecycle:
    """Tests for the IDLE / DRAFTING / EDITING states."""

    def test_starts_idle(self) -> None:
        controller = _controller(FakeTaskAPI())
        assert controller.state is FormState.IDLE
        assert controller.draft == Draft()

    def test_input_moves_to_drafting(self) -> None:
        controller = _controller(FakeTaskAPI())
        controller.update_draft(name="Pay rent")
        assert controller.state is FormState.DRAFTING

    def test_begin_edit_copies_fields(self, seeded_api: FakeTaskAPI) -> None:
        controller = _controller(seeded_api)
        controller.update_draft(name="unsaved")

        controller.begin_edit(seeded_api.tasks[1])

        assert controller.state is FormState.EDITING
        assert controller.draft == Draft(
            name="Fix roof", cost="2500.00", deadline="2025-03-01", editing_id=2
        )
        assert seeded_api.calls == []

    def test_update_draft_keeps_editing_id(self, seeded_api: FakeTaskAPI) -> None:
        controller = _controller(seeded_api)
        controller.begin_edit(seeded_api.tasks[0])
        controller.update_draft(cost="50")
        assert controller.draft.editing_id == 1

    def test_update_draft_rejects_unknown_fields(self) -> None:
        controller = _controller(FakeTaskAPI())
        with pytest.raises(TypeError):
            controller.update_draft(editing_id=3)

    def test_cancel_edit_returns_to_idle(self, seeded_api: FakeTaskAPI) -> None:
        controller = _controller(seeded_api)
        controller.begin_edit(seeded_api.tasks[0])
        controller.cancel_edit()
        assert controller.state is FormState.IDLE


class TestSubmit:
    """Tests for submit() on both branches."""

    @pytest.mark.asyncio
    async def test_create_posts_numeric_cost_and_clears_draft(self) -> None:
        api = FakeTaskAPI()
        controller = _controller(api)
        controller.update_draft(name="Pay rent", cost="1200", deadline="2025-01-01")

        result = await controller.submit()

        assert result.ok
        assert api.calls[0] == (
            "create",
            {"name": "Pay rent", "cost": 1200.0, "deadline": "2025-01-01"},
        )
        assert api.ops() == ["create", "list"]
        assert controller.draft == Draft()
        assert controller.state is FormState.IDLE

        created = [t for t in controller.tasks if t.name == "Pay rent"]
        assert len(created) == 1
        assert created[0].id == 1
        assert created[0].deadline == "2025-01-01"
        assert is_high_cost(created[0])

    @pytest.mark.asyncio
    async def test_edit_then_change_cost_issues_update(self, seeded_api: FakeTaskAPI) -> None:
        controller = _controller(seeded_api)
        await controller.refresh()
        controller.begin_edit(controller.tasks[0])
        controller.update_draft(cost="50")

        result = await controller.submit()

        assert result.ok
        assert (
            "update",
            1,
            {"name": "Buy paint", "cost": 50.0, "deadline": "2025-02-10"},
        ) in seeded_api.calls
        assert "create" not in seeded_api.ops()
        assert controller.draft == Draft()

    @pytest.mark.asyncio
    async def test_update_leaves_other_tasks_unchanged(self, seeded_api: FakeTaskAPI) -> None:
        controller = _controller(seeded_api)
        await controller.refresh()
        before = {t.id: t for t in controller.tasks}
        controller.begin_edit(before[2])
        controller.update_draft(name="Fix roof properly")

        await controller.submit()

        after = {t.id: t for t in controller.tasks}
        assert after[2].name == "Fix roof properly"
        assert after[1] == before[1]
        assert after[3] == before[3]

    @pytest.mark.asyncio
    async def test_invalid_cost_is_rejected_before_request(self) -> None:
        api = FakeTaskAPI()
        controller = _controller(api)
        controller.update_draft(name="Pay rent", cost="abc", deadline="2025-01-01")

        result = await controller.submit()

        assert not result.ok
        assert result.error
        assert controller.last_error == result.error
        assert api.calls == []
        assert controller.draft.cost == "abc"

    @pytest.mark.asyncio
    async def test_failed_create_keeps_draft(self) -> None:
        api = FakeTaskAPI()
        api.fail_on.add("create")
        controller = _controller(api)
        controller.update_draft(name="Pay rent", cost="1200", deadline="2025-01-01")

        result = await controller.submit()

        assert not result.ok
        assert controller.last_error == "create failed"
        assert controller.draft.name == "Pay rent"
        assert api.ops() == ["create"]

    @pytest.mark.asyncio
    async def test_refresh_failure_after_save_still_clears_draft(self) -> None:
        api = FakeTaskAPI()
        api.fail_on.add("list")
        controller = _controller(api)
        controller.update_draft(name="Pay rent", cost="1200", deadline="2025-01-01")

        result = await controller.submit()

        assert not result.ok
        assert result.error == "list failed"
        assert controller.draft == Draft()
        assert len(api.tasks) == 1


class TestRemove:
    """Tests for remove()."""

    @pytest.mark.asyncio
    async def test_confirmed_delete_refreshes(self, seeded_api: FakeTaskAPI) -> None:
        confirm = FakeConfirm(True)
        controller = TaskFormController(seeded_api, confirm)
        await controller.refresh()

        result = await controller.remove(2)

        assert result.ok
        assert confirm.prompts == [DELETE_PROMPT]
        assert 2 not in [t.id for t in controller.tasks]
        assert seeded_api.ops() == ["list", "delete", "list"]

    @pytest.mark.asyncio
    async def test_declined_delete_has_no_side_effects(self, seeded_api: FakeTaskAPI) -> None:
        controller = _controller(seeded_api, answer=False)
        await controller.refresh()
        before = controller.tasks

        result = await controller.remove(2)

        assert result.cancelled
        assert not result.ok
        assert result.error is None
        assert controller.tasks == before
        assert "delete" not in seeded_api.ops()

    @pytest.mark.asyncio
    async def test_on_confirmed_runs_before_request(self, seeded_api: FakeTaskAPI) -> None:
        controller = _controller(seeded_api)
        seen: list[list[str]] = []

        await controller.remove(2, on_confirmed=lambda: seen.append(seeded_api.ops()))

        assert seen == [[]]

    @pytest.mark.asyncio
    async def test_on_confirmed_skipped_when_declined(self, seeded_api: FakeTaskAPI) -> None:
        controller = _controller(seeded_api, answer=False)
        seen: list[bool] = []

        await controller.remove(2, on_confirmed=lambda: seen.append(True))

        assert seen == []

    @pytest.mark.asyncio
    async def test_delete_keeps_unrelated_draft(self, seeded_api: FakeTaskAPI) -> None:
        controller = _controller(seeded_api)
        await controller.refresh()
        controller.begin_edit(controller.tasks[0])

        await controller.remove(3)

        assert controller.draft.editing_id == 1

    @pytest.mark.asyncio
    async def test_delete_of_edited_task_clears_draft(self, seeded_api: FakeTaskAPI) -> None:
        controller = _controller(seeded_api)
        await controller.refresh()
        controller.begin_edit(controller.tasks[0])

        await controller.remove(1)

        assert controller.state is FormState.IDLE

    @pytest.mark.asyncio
    async def test_failed_delete_keeps_cache(self, seeded_api: FakeTaskAPI) -> None:
        controller = _controller(seeded_api)
        await controller.refresh()
        seeded_api.fail_on.add("delete")

        result = await controller.remove(1)

        assert not result.ok
        assert controller.last_error == "delete failed"
        assert [t.id for t in controller.tasks] == [1, 2, 3]


class TestReorder:
    """Tests for the local-only reorder."""

    @pytest.mark.asyncio
    async def test_reorder_is_local(self, seeded_api: FakeTaskAPI) -> None:
        controller = _controller(seeded_api)
        await controller.refresh()
        calls_before = len(seeded_api.calls)

        controller.reorder(3, "up")

        assert [t.id for t in controller.tasks] == [1, 3, 2]
        assert len(seeded_api.calls) == calls_before

    @pytest.mark.asyncio
    async def test_first_up_is_noop(self, seeded_api: FakeTaskAPI) -> None:
        controller = _controller(seeded_api)
        await controller.refresh()

        controller.reorder(1, "up")

        assert [t.id for t in controller.tasks] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_refresh_discards_local_order(self, seeded_api: FakeTaskAPI) -> None:
        controller = _controller(seeded_api)
        await controller.refresh()
        controller.reorder(1, "down")

        await controller.refresh()

        assert [t.id for t in controller.tasks] == [1, 2, 3]


class SlowTaskAPI(FakeTaskAPI):
    """FakeTaskAPI whose list call waits until released."""

    def __init__(self) -> None:
        super().__init__()
        self.release = asyncio.Event()

    async def list_tasks(self) -> list[Task]:
        await self.release.wait()
        return await super().list_tasks()


class TestBusyGuard:
    """Overlapping backend operations are rejected."""

    @pytest.mark.asyncio
    async def test_second_operation_rejected_while_busy(self) -> None:
        api = SlowTaskAPI()
        controller = _controller(api)
        controller.update_draft(name="Pay rent", cost="1200", deadline="2025-01-01")

        pending = asyncio.create_task(controller.refresh())
        await asyncio.sleep(0)
        assert controller.busy

        result = await controller.submit()

        assert not result.ok
        assert result.error == BUSY_MESSAGE
        assert "create" not in api.ops()

        api.release.set()
        assert (await pending).ok
        assert not controller.busy
