import pytest

from bizadmin.services.document import NO_SCROLL_CLASS, DocumentBody, ScrollLock


def test_acquire_and_release_are_idempotent():
    lock = ScrollLock()
    lock.acquire()
    lock.acquire()
    assert lock.body.classes == [NO_SCROLL_CLASS]

    lock.release()
    lock.release()
    assert lock.body.classes == []
    assert lock.held is False


def test_shared_body_keeps_class_until_last_holder_releases():
    body = DocumentBody()
    first, second = ScrollLock(body), ScrollLock(body)
    first.acquire()
    second.acquire()

    first.release()
    assert body.classes == [NO_SCROLL_CLASS]

    second.release()
    assert body.classes == []


def test_context_manager_releases_on_error():
    lock = ScrollLock()
    with pytest.raises(RuntimeError):
        with lock:
            assert lock.held
            raise RuntimeError("boom")
    assert lock.body.classes == []
