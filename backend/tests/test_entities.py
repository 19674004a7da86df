"""Tests for the normalized chat entity store."""

import pytest

from chatlist.errors import MalformedPayload, UnknownChat
from chatlist.models.domain import parse_timestamp
from factories import message, raw_chat, raw_message


def broken_chat(chat_id):
    bad = raw_message()
    bad["custom_json"] = "not json"
    return raw_chat(chat_id, last_message=bad)


class TestLoadChats:
    def test_keys_match_input_ids(self, store):
        store.load_chats([raw_chat(1), raw_chat(2), raw_chat(3)])
        assert store.ids() == {1, 2, 3}
        assert len(store) == 3

    def test_duplicate_ids_stored_once(self, store):
        store.load_chats([raw_chat(1, title="old"), raw_chat(1, title="new")])
        assert len(store) == 1
        assert store.get(1).title == "new"

    def test_replaces_previous_store(self, store):
        store.load_chats([raw_chat(1), raw_chat(2)])
        store.load_chats([raw_chat(3)])
        assert store.ids() == {3}

    def test_discards_message_history(self, store):
        store.load_chats([raw_chat(1)])
        store.add_message(1, message(sending_time=5))
        store.load_chats([raw_chat(1)])
        assert store.get(1).message_entities == {}

    def test_decodes_last_message_payload(self, store):
        store.load_chats([raw_chat(1, last_message=raw_message(sending_time=77))])
        assert store.get(1).last_message.custom_json.sending_time == 77

    @pytest.mark.parametrize("created", [1714557600000, float("nan")])
    def test_out_of_range_timestamp_is_malformed(self, store, created):
        store.load_chats([raw_chat(1)])
        with pytest.raises(MalformedPayload):
            store.load_chats([raw_chat(2, created=created)])
        with pytest.raises(MalformedPayload):
            store.load_chats([raw_chat(3, last_message=raw_message(created=created))])
        assert store.ids() == {1}

    def test_malformed_record_leaves_store_intact(self, store):
        store.load_chats([raw_chat(1)])
        with pytest.raises(MalformedPayload):
            store.load_chats([raw_chat(2), broken_chat(3)])
        assert store.ids() == {1}


class TestLoadLatestChats:
    def test_keeps_chats_absent_from_page(self, store):
        store.load_chats([raw_chat(1), raw_chat(2)])
        store.load_latest_chats([raw_chat(2, title="renamed"), raw_chat(3)])
        assert store.ids() == {1, 2, 3}
        assert store.get(2).title == "renamed"

    def test_replaced_chat_loses_messages(self, store):
        store.load_chats([raw_chat(1), raw_chat(2)])
        store.add_message(1, message(sending_time=5))
        store.add_message(2, message(sending_time=6))
        store.load_latest_chats([raw_chat(1)])
        assert store.get(1).message_entities == {}
        assert 6 in store.get(2).message_entities

    def test_malformed_page_is_not_applied(self, store):
        store.load_chats([raw_chat(1, title="before")])
        with pytest.raises(MalformedPayload):
            store.load_latest_chats([raw_chat(1, title="after"), broken_chat(2)])
        assert store.get(1).title == "before"
        assert store.ids() == {1}


class TestUpdateChat:
    def test_shallow_merge(self, store):
        store.load_chats([raw_chat(1, title="old")])
        store.update_chat({"id": 1, "title": "new"})
        chat = store.get(1)
        assert chat.title == "new"
        assert chat.admin == "alice"

    def test_unknown_id_is_ignored(self, store):
        store.load_chats([raw_chat(1)])
        store.update_chat({"id": 2, "title": "ghost"})
        assert store.ids() == {1}

    def test_keeps_message_map(self, store):
        store.load_chats([raw_chat(1)])
        store.add_message(1, message(sending_time=5))
        store.update_chat({"id": 1, "title": "new"})
        assert 5 in store.get(1).message_entities

    def test_raw_last_message_is_decoded(self, store):
        store.load_chats([raw_chat(1)])
        store.update_chat({"id": 1, "last_message": raw_message(4, sending_time=9)})
        assert store.get(1).last_message.sending_time == 9

    def test_backend_people_records_are_flattened(self, store):
        store.load_chats([raw_chat(1)])
        store.update_chat({"id": 1, "people": [{"person": {"username": "carol"}}, "dave"]})
        assert store.get(1).people == ["carol", "dave"]

    def test_unknown_field_ignored(self, store):
        store.load_chats([raw_chat(1)])
        store.update_chat({"id": 1, "color": "red", "title": "kept"})
        assert store.get(1).title == "kept"

    def test_invalid_value_leaves_chat_untouched(self, store):
        store.load_chats([raw_chat(1, title="old")])
        with pytest.raises(MalformedPayload):
            store.update_chat({"id": 1, "title": "new", "created": "not a date"})
        assert store.get(1).title == "old"


class TestMessages:
    def test_add_message(self, store):
        store.load_chats([raw_chat(1)])
        msg = message(10, sending_time=500)
        store.add_message(1, msg)
        chat = store.get(1)
        assert chat.message_entities[500] == msg
        assert chat.last_message is chat.message_entities[500]

    def test_caller_mutation_does_not_leak(self, store):
        store.load_chats([raw_chat(1)])
        msg = message(10, sending_time=500, text="sent")
        store.add_message(1, msg)
        msg.text = "changed afterwards"

        chat = store.get(1)
        assert chat.message_entities[500].text == "sent"
        assert chat.last_message.text == "sent"

    def test_set_last_message_copies(self, store):
        store.load_chats([raw_chat(1)])
        msg = message(10, sending_time=500, text="sent")
        store.set_last_message(1, msg)
        msg.text = "changed afterwards"
        assert store.get(1).last_message.text == "sent"

    def test_add_message_same_key_overwrites(self, store):
        store.load_chats([raw_chat(1)])
        store.add_message(1, message(10, sending_time=500, text="first"))
        store.add_message(1, message(11, sending_time=500, text="second"))
        entities = store.get(1).message_entities
        assert len(entities) == 1
        assert entities[500].text == "second"

    def test_edit_latest_message_moves_pointer(self, store):
        store.load_chats([raw_chat(1)])
        store.add_message(1, message(10, sending_time=500, text="typo"))
        store.edit_message(1, message(10, sending_time=500, text="fixed"))
        assert store.get(1).last_message.text == "fixed"
        assert store.get(1).message_entities[500].text == "fixed"

    def test_edit_older_message_keeps_pointer(self, store):
        store.load_chats([raw_chat(1)])
        store.add_message(1, message(10, sending_time=500, text="old"))
        store.add_message(1, message(11, sending_time=600, text="latest"))
        store.edit_message(1, message(10, sending_time=500, text="old, edited"))
        chat = store.get(1)
        assert chat.last_message.id == 11
        assert chat.message_entities[500].text == "old, edited"

    def test_edit_without_last_message(self, store):
        store.load_chats([raw_chat(1)])
        store.edit_message(1, message(10, sending_time=500))
        assert store.get(1).last_message is None
        assert 500 in store.get(1).message_entities

    def test_set_last_message_leaves_map(self, store):
        store.load_chats([raw_chat(1)])
        store.set_last_message(1, message(10, sending_time=500, created=30))
        chat = store.get(1)
        assert chat.last_message.id == 10
        assert chat.message_entities == {}
        assert chat.effective_time == parse_timestamp(30)

    def test_set_message_entities_replaces_map(self, store):
        store.load_chats([raw_chat(1)])
        store.add_message(1, message(10, sending_time=500))
        replacement = {1: message(1, sending_time=1), 2: message(2, sending_time=2)}
        store.set_message_entities(1, replacement)
        assert set(store.get(1).message_entities) == {1, 2}
        replacement[3] = message(3, sending_time=3)
        assert 3 not in store.get(1).message_entities

    @pytest.mark.parametrize(
        "operation",
        ["add_message", "edit_message", "set_last_message"],
    )
    def test_unknown_chat(self, store, operation):
        store.load_chats([raw_chat(1)])
        with pytest.raises(UnknownChat) as exc_info:
            getattr(store, operation)(2, message())
        assert exc_info.value.chat_id == 2
        assert store.ids() == {1}

    def test_set_message_entities_unknown_chat(self, store):
        with pytest.raises(UnknownChat):
            store.set_message_entities(1, {})
