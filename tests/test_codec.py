"""Tests for msgspec encode/decode of string lists."""

from __future__ import annotations

import threading

import msgspec
import pytest
from hypothesis import given

from klaw_strlist import MalformedEncodingError, StrList, StrListBuf, StrListMut
from klaw_strlist.codec import dec_hook, decode, enc_hook, encode
from tests.strategies import element_lists


class Entry(msgspec.Struct, frozen=True):
    name: str
    tags: StrListBuf


class TestHooks:
    """Tests for enc_hook / dec_hook."""

    def test_enc_hook_returns_packed_bytes(self, abc_buf: StrListBuf) -> None:
        assert enc_hook(abc_buf) == b'a\xffbb\xffc\xff'
        assert enc_hook(abc_buf.as_str_list()) == b'a\xffbb\xffc\xff'

    def test_enc_hook_rejects_other_types(self) -> None:
        with pytest.raises(NotImplementedError, match='object'):
            enc_hook(object())

    def test_dec_hook_targets(self) -> None:
        packed = b'x\xffy\xff'
        buf = dec_hook(StrListBuf, packed)
        view = dec_hook(StrList, packed)
        view_mut = dec_hook(StrListMut, packed)
        assert isinstance(buf, StrListBuf)
        assert type(view) is StrList
        assert type(view_mut) is StrListMut
        assert buf.to_list() == view.to_list() == view_mut.to_list() == ['x', 'y']

    def test_dec_hook_rejects_malformed(self) -> None:
        with pytest.raises(MalformedEncodingError):
            dec_hook(StrListBuf, b'no separator')

    def test_dec_hook_rejects_non_bytes(self) -> None:
        with pytest.raises(TypeError, match='got str'):
            dec_hook(StrListBuf, 'x\xff')

    def test_dec_hook_rejects_other_types(self) -> None:
        with pytest.raises(NotImplementedError):
            dec_hook(dict, b'')


class TestEncodeDecode:
    """Tests for the module-level encode/decode helpers."""

    def test_payload_is_msgpack_bin(self, abc_buf: StrListBuf) -> None:
        assert msgspec.msgpack.decode(encode(abc_buf)) == b'a\xffbb\xffc\xff'

    def test_decode_default_type(self, abc_buf: StrListBuf) -> None:
        decoded = decode(encode(abc_buf))
        assert isinstance(decoded, StrListBuf)
        assert decoded == abc_buf

    def test_decode_into_view(self, abc_buf: StrListBuf) -> None:
        view = decode(encode(abc_buf), type=StrList)
        assert view.to_list() == ['a', 'bb', 'c']

    def test_empty_list(self) -> None:
        assert decode(encode(StrListBuf())).is_empty()

    def test_struct_field(self) -> None:
        entry = Entry('paths', StrListBuf(['usr', 'bin']))
        decoded = decode(encode(entry), type=Entry)
        assert decoded.name == 'paths'
        assert decoded.tags.to_list() == ['usr', 'bin']

    def test_nested_container(self) -> None:
        lists = [StrListBuf(['a']), StrListBuf([])]
        decoded = decode(encode(lists), type=list[StrListBuf])
        assert [d.to_list() for d in decoded] == [['a'], []]

    def test_malformed_blob_is_validation_error(self) -> None:
        data = msgspec.msgpack.encode(b'a\xffb')
        with pytest.raises(msgspec.ValidationError, match='missing trailing separator'):
            decode(data)

    @pytest.mark.parametrize('target', [StrListBuf, StrList, StrListMut])
    def test_invalid_utf8_blob_is_validation_error(self, target: type) -> None:
        """A blob with a separator at the end is still checked element by element."""
        data = msgspec.msgpack.encode(b'ok\xff\x80\xff')
        with pytest.raises(msgspec.ValidationError, match='invalid UTF-8 in element 1'):
            decode(data, type=target)

    def test_wrong_wire_type_is_validation_error(self) -> None:
        data = msgspec.msgpack.encode('a')
        with pytest.raises(msgspec.ValidationError):
            decode(data)

    @given(element_lists)
    def test_preserves_elements(self, values: list[str]) -> None:
        assert decode(encode(StrListBuf(values))).to_list() == values


class TestThreading:
    """Encoders are per thread."""

    def test_encode_from_threads(self) -> None:
        results: list[bytes] = []
        lock = threading.Lock()

        def worker(value: str) -> None:
            data = encode(StrListBuf([value]))
            with lock:
                results.append(data)

        threads = [threading.Thread(target=worker, args=(str(i),)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sorted(decode(r).to_list()[0] for r in results) == [str(i) for i in range(8)]
