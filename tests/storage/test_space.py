import pytest
from innospect.storage.space import Space
from innospect.storage.page import Page, PageType
from innospect.storage.registry import PageTypeRegistry
from innospect.storage.errors import MalformedPage, PageOutOfRange

PAGE_SIZE = 16384


def write_space(path, pages):
    with open(path, 'wb') as f:
        for data in pages:
            f.write(data)
    return str(path)


def test_space_reads_pages(tmp_path, page_bytes):
    path = write_space(tmp_path / "t.ibd", [
        page_bytes(type_code=8, offset=0, space_id=7),
        page_bytes(type_code=17855, offset=1, next=2, space_id=7),
        page_bytes(type_code=17855, offset=2, prev=1, space_id=7),
    ])
    with Space(path) as space:
        assert space.page_count == 3
        assert len(space.read_page(1)) == PAGE_SIZE
        page = space.page(1)
        assert page.space is space
        assert page.type is PageType.INDEX
        assert page.prev is None
        assert page.next == 2
        assert [p.offset for p in space.each_page()] == [0, 1, 2]
        assert [p.space_id for p in space.each_page()] == [7, 7, 7]


def test_space_uses_its_registry(tmp_path, page_bytes):
    class FspHeaderPage(Page):
        pass

    registry = PageTypeRegistry()
    registry.register(8, FspHeaderPage)
    path = write_space(tmp_path / "t.ibd", [page_bytes(type_code=8)])
    with Space(path, registry=registry) as space:
        assert type(space.page(0)) is FspHeaderPage


def test_space_custom_page_size(tmp_path, page_bytes):
    path = write_space(tmp_path / "t.ibd", [page_bytes(size=4096, offset=n) for n in range(4)])
    with Space(path, page_size=4096) as space:
        assert space.page_count == 4
        assert space.page(3).size == 4096
        assert space.page(3).offset == 3


def test_space_page_out_of_range(tmp_path, page_bytes):
    path = write_space(tmp_path / "t.ibd", [page_bytes()])
    with Space(path) as space:
        with pytest.raises(PageOutOfRange):
            space.read_page(1)
        with pytest.raises(PageOutOfRange):
            space.page(-1)


def test_space_rejects_partial_page(tmp_path, page_bytes):
    path = write_space(tmp_path / "t.ibd", [page_bytes(), b'\x00' * 100])
    with pytest.raises(MalformedPage):
        Space(path)


@pytest.mark.parametrize("page_size", [0, 1000, 16385])
def test_space_rejects_bad_page_size(tmp_path, page_bytes, page_size):
    path = write_space(tmp_path / "t.ibd", [page_bytes()])
    with pytest.raises(ValueError):
        Space(path, page_size=page_size)


def test_space_close(tmp_path, page_bytes):
    path = write_space(tmp_path / "t.ibd", [page_bytes()])
    space = Space(path)
    space.close()
    space.close()
    with pytest.raises(ValueError):
        space.read_page(0)
