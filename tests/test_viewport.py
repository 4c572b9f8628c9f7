from bizadmin.services.viewport import ViewportObserver, view_mode_for


def test_view_mode_breakpoint():
    assert view_mode_for(999) == "list"
    assert view_mode_for(1000) == "table"
    assert view_mode_for(1600, breakpoint=1800) == "list"


def test_resize_notifies_every_listener():
    viewport = ViewportObserver(1200)
    seen = []
    viewport.subscribe(seen.append)

    assert viewport.resize(500) == "list"
    assert viewport.resize(700) == "list"
    assert viewport.resize(1000) == "table"

    assert seen == ["list", "list", "table"]
    assert viewport.width == 1000


def test_unsubscribe_is_idempotent():
    viewport = ViewportObserver(1200)
    seen = []
    unsubscribe = viewport.subscribe(seen.append)

    unsubscribe()
    unsubscribe()
    viewport.resize(300)

    assert seen == []
    assert viewport.subscriber_count == 0
