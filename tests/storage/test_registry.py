import pytest
from innospect.storage.page import Page, PageType
from innospect.storage.registry import (
    PAGE_TYPE_REGISTRY, PageTypeRegistry, register_page_type
)


class IndexPage(Page):
    pass


class OtherIndexPage(Page):
    pass


class XdesPage(Page):
    pass


def test_lookup_unregistered_returns_none():
    registry = PageTypeRegistry()
    assert registry.lookup(17855) is None
    assert 17855 not in registry
    assert len(registry) == 0


def test_load_dispatches_to_registered_class(page_bytes):
    registry = PageTypeRegistry()
    registry.register(PageType.INDEX, IndexPage)
    space = object()
    page = Page.load(space, page_bytes(type_code=17855, offset=3), registry=registry)
    assert type(page) is IndexPage
    assert page.space is space
    assert page.offset == 3
    assert repr(page).startswith("<IndexPage:")


def test_reregister_last_wins(page_bytes):
    registry = PageTypeRegistry()
    registry.register(17855, IndexPage)
    registry.register(17855, OtherIndexPage)
    assert registry.lookup(17855) is OtherIndexPage
    assert len(registry) == 1
    assert type(Page.load(None, page_bytes(type_code=17855), registry=registry)) is OtherIndexPage


def test_unregistered_type_stays_generic(page_bytes):
    registry = PageTypeRegistry()
    registry.register(9, XdesPage)
    assert type(Page.load(None, page_bytes(type_code=17855), registry=registry)) is Page


def test_unknown_code_can_be_registered(page_bytes):
    registry = PageTypeRegistry()
    registry.register(9999, XdesPage)
    page = Page.load(None, page_bytes(type_code=9999), registry=registry)
    assert type(page) is XdesPage
    assert page.type.name == "UNKNOWN(9999)"


def test_unregister_and_codes():
    registry = PageTypeRegistry()
    registry.register(9, XdesPage)
    registry.register(3, IndexPage)
    assert registry.codes() == [3, 9]
    assert registry.unregister(9) is XdesPage
    assert registry.unregister(9) is None
    assert registry.codes() == [3]


@pytest.mark.parametrize("code", [-1, 0x10000, "INDEX", 1.5, True])
def test_invalid_codes(code):
    with pytest.raises(ValueError):
        PageTypeRegistry().register(code, IndexPage)


def test_decorator_uses_default_registry(page_bytes):
    try:
        @register_page_type(12)
        class ZblobPage(Page):
            pass

        assert PAGE_TYPE_REGISTRY.lookup(12) is ZblobPage
        assert type(Page.load(None, page_bytes(type_code=12))) is ZblobPage
    finally:
        PAGE_TYPE_REGISTRY.unregister(12)
    assert type(Page.load(None, page_bytes(type_code=12))) is Page


def test_decorator_with_explicit_registry():
    registry = PageTypeRegistry()

    @register_page_type(10, registry)
    class BlobPage(Page):
        pass

    assert registry.lookup(10) is BlobPage
    assert 10 not in PAGE_TYPE_REGISTRY
