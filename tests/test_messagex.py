from yearning_notify.messagex import (
    AppInfo,
    File,
    Message,
    MessageType,
    Param,
    Source,
    Target,
)


def test_message_type_compares_as_string():
    assert MessageType.TEXT == "text"
    assert MessageType("actionCard") is MessageType.ACTION_CARD
    assert MessageType("FeedCard") is MessageType.FEED_CARD


def test_message_defaults():
    message = Message()
    assert message.type == ""
    assert message.target == Target()
    assert message.app is None
    assert message.files == []
    assert message.sources == []


def test_mutable_defaults_are_independent():
    first = Message()
    second = Message()
    first.target.emails.append("a@example.com")
    first.files.append(File(name="a.txt", data=b"abc"))
    assert second.target.emails == []
    assert second.files == []


def test_file_defaults_to_not_inline():
    attachment = File(name="a.txt", data=b"abc")
    assert attachment.inline is False
    assert attachment.data == b"abc"


def test_message_equality_covers_nested_values():
    build = lambda: Message(  # noqa: E731
        type=MessageType.MARKDOWN,
        subject="s",
        body="b",
        target=Target(all=True, mobiles=["m"]),
        params=[Param(name="n", value="v")],
        app=AppInfo(name="app"),
        sources=[Source(name="x", kind="k")],
    )
    assert build() == build()
    changed = build()
    changed.sources[0].kind = "other"
    assert changed != build()