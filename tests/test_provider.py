from concurrent.futures import ThreadPoolExecutor

import pytest

from todo_state import (
    IdConflictError,
    IdentifierSequence,
    ProviderMissingError,
    TodoItem,
    TodoProvider,
    TodoStore,
    UnhandledActionError,
)


class TestSequence:
    def test_starts_after_highest_seed_id(self):
        seq = IdentifierSequence.after([TodoItem(id=7, text="a"), TodoItem(id=2, text="b")])
        assert seq.current == 8

    def test_empty_seed_starts_at_one(self):
        assert IdentifierSequence.after([]).current == 1

    def test_take_is_read_then_advance(self):
        seq = IdentifierSequence(5)
        assert seq.take() == 5
        assert seq.take() == 6
        assert seq.current == 7

    def test_current_then_advance(self):
        seq = IdentifierSequence(5)
        assert seq.current == 5
        assert seq.advance() == 6
        assert seq.current == 6

    def test_claim_moves_past_value(self):
        seq = IdentifierSequence(5)
        assert seq.claim(5) == 5
        assert seq.current == 6
        seq.claim(9)
        assert seq.take() == 10

    def test_claim_rejects_issued_ids(self):
        seq = IdentifierSequence(5)
        with pytest.raises(IdConflictError) as excinfo:
            seq.claim(4)
        assert excinfo.value.todo_id == 4
        assert seq.current == 5

    def test_take_from_many_threads(self):
        seq = IdentifierSequence(5)
        with ThreadPoolExecutor(max_workers=8) as pool:
            issued = list(pool.map(lambda _: seq.take(), range(500)))
        assert sorted(issued) == list(range(5, 505))
        assert seq.current == 505


class TestStore:
    def test_rejects_duplicate_seed_ids(self):
        with pytest.raises(ValueError):
            TodoStore([TodoItem(id=1, text="a"), TodoItem(id=1, text="b")])

    def test_listeners_fire_on_each_dispatch(self):
        store = TodoStore()
        seen = []
        unsubscribe = store.subscribe(seen.append)

        store.dispatch({"type": "TOGGLE", "id": 4})
        store.dispatch({"type": "REMOVE", "id": 99})
        assert len(seen) == 2
        assert seen[-1] is store.state

        unsubscribe()
        store.dispatch({"type": "REMOVE", "id": 1})
        assert len(seen) == 2

    def test_failed_dispatch_keeps_state_and_skips_listeners(self):
        store = TodoStore()
        before = store.state
        seen = []
        store.subscribe(seen.append)

        with pytest.raises(UnhandledActionError):
            store.dispatch({"type": "FOO"})
        assert store.state is before
        assert seen == []


class TestProviderScope:
    def test_accessors_fail_when_inactive(self):
        provider = TodoProvider()
        assert provider.active is False
        for accessor in (provider.get_state, provider.get_dispatcher, provider.get_next_id):
            with pytest.raises(ProviderMissingError, match="Cannot find TodoProvider"):
                accessor()

    def test_accessors_fail_after_scope_ends(self):
        provider = TodoProvider()
        with provider:
            dispatch = provider.get_dispatcher()
        with pytest.raises(ProviderMissingError):
            provider.get_state()
        # A dispatcher taken inside the scope is no longer usable
        with pytest.raises(ProviderMissingError):
            dispatch({"type": "REMOVE", "id": 1})

    def test_seed_state(self):
        with TodoProvider() as todos:
            state = todos.get_state()
            assert [t.id for t in state] == [1, 2, 3, 4]
            assert [t.done for t in state] == [True, True, False, False]
            assert todos.get_next_id().current == 5

    def test_dispatch_is_visible_to_get_state(self):
        with TodoProvider() as todos:
            dispatch = todos.get_dispatcher()
            before = todos.get_state()
            dispatch({"type": "TOGGLE", "id": 3})
            after = todos.get_state()
            assert after is not before
            assert after[2].done is True

    def test_unhandled_action_leaves_state(self):
        with TodoProvider() as todos:
            before = todos.get_state()
            with pytest.raises(UnhandledActionError):
                todos.get_dispatcher()({"type": "FOO"})
            assert todos.get_state() is before

    def test_create_workflow_ids_are_monotonic(self):
        with TodoProvider() as todos:
            next_id = todos.get_next_id()
            dispatch = todos.get_dispatcher()
            issued = []
            for text in ["a", "b", "c"]:
                new_id = next_id.current
                dispatch({"type": "CREATE", "todo": {"id": new_id, "text": text, "done": False}})
                next_id.advance()
                issued.append(new_id)
            issued.append(todos.create_todo("d").id)
            assert issued == [5, 6, 7, 8]
            assert [t.id for t in todos.get_state()] == [1, 2, 3, 4, 5, 6, 7, 8]

    def test_ids_not_reused_after_remove(self):
        with TodoProvider() as todos:
            created = todos.create_todo("temp")
            todos.get_dispatcher()({"type": "REMOVE", "id": created.id})
            assert todos.create_todo("next").id == created.id + 1

    def test_new_scope_resets_store(self):
        provider = TodoProvider()
        with provider:
            provider.create_todo("gone soon")
            provider.get_dispatcher()({"type": "REMOVE", "id": 1})
        with provider:
            assert [t.id for t in provider.get_state()] == [1, 2, 3, 4]
            assert provider.get_next_id().current == 5

    def test_custom_seed(self):
        with TodoProvider(initial=[TodoItem(id=10, text="only")]) as todos:
            assert todos.create_todo("after").id == 11

    def test_subscribe(self):
        with TodoProvider() as todos:
            seen = []
            todos.subscribe(seen.append)
            todos.create_todo("watched")
            assert seen and seen[-1][-1].text == "watched"


class TestConcurrentAccess:
    def test_create_todo_from_many_threads(self):
        with TodoProvider() as todos:
            with ThreadPoolExecutor(max_workers=8) as pool:
                created = list(pool.map(lambda i: todos.create_todo(f"task {i}"), range(200)))
            created_ids = [t.id for t in created]
            assert sorted(created_ids) == list(range(5, 205))
            # List order follows the order ids were issued
            state_ids = [t.id for t in todos.get_state()]
            assert state_ids == list(range(1, 205))

    def test_remove_same_id_from_many_threads(self):
        with TodoProvider() as todos:
            with ThreadPoolExecutor(max_workers=8) as pool:
                results = list(pool.map(lambda _: todos.remove_todo(3), range(50)))
            assert results.count(True) == 1
            assert [t.id for t in todos.get_state()] == [1, 2, 4]

    def test_toggle_and_remove_report_absent_items(self):
        with TodoProvider() as todos:
            assert todos.toggle_todo(99) is None
            assert todos.remove_todo(99) is False
            toggled = todos.toggle_todo(3)
            assert toggled is not None and toggled.done is True
            assert todos.remove_todo(3) is True
            assert todos.toggle_todo(3) is None

    def test_insert_todo_claims_id(self):
        with TodoProvider() as todos:
            todos.insert_todo(TodoItem(id=7, text="chosen"))
            assert todos.get_next_id().current == 8
            with pytest.raises(IdConflictError):
                todos.insert_todo(TodoItem(id=7, text="again"))
            assert [t.id for t in todos.get_state()] == [1, 2, 3, 4, 7]
            assert todos.create_todo("after").id == 8
