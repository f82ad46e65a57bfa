import hashlib
import unittest

from hashsum.core import LENGTH_OFFSET, MASK64
from hashsum.drivers import hash_slice, new
from hashsum.engine import (
    Algorithm,
    BlockSizeError,
    DigestNotReadyError,
    EngineFinishedError,
    PadState,
)
from hashsum.md5 import MD5Engine
from hashsum.sha1 import SHA1Engine


class CountingMD5(MD5Engine):
    def __init__(self, engine=None):
        super().__init__(engine)
        self.padded_blocks = 0

    def _pad(self, block):
        self.padded_blocks += 1
        return super()._pad(block)


class CountingSHA1(SHA1Engine):
    def __init__(self, engine=None):
        super().__init__(engine)
        self.padded_blocks = 0

    def _pad(self, block):
        self.padded_blocks += 1
        return super()._pad(block)


class RecordingMD5(MD5Engine):
    def __init__(self, engine=None):
        super().__init__(engine)
        self.blocks = []

    def _process(self, block):
        self.blocks.append(block)
        super()._process(block)


class RecordingSHA1(SHA1Engine):
    def __init__(self, engine=None):
        super().__init__(engine)
        self.blocks = []

    def _process(self, block):
        self.blocks.append(block)
        super()._process(block)


def _drive(ctx, msg: bytes) -> bytes:
    for off in range(0, len(msg), 64):
        ctx.absorb(msg[off : off + 64])
    if not ctx.finished:
        ctx.absorb(b"")
    return ctx.digest()


class TestPaddingBoundaries(unittest.TestCase):
    def test_spill_into_second_padding_block(self) -> None:
        for cls, ref in ((CountingMD5, hashlib.md5), (CountingSHA1, hashlib.sha1)):
            for n in range(0, 200):
                msg = bytes(i & 0xFF for i in range(n))
                ctx = cls()
                digest = _drive(ctx, msg)
                with self.subTest(alg=ctx.algorithm.label, length=n):
                    self.assertEqual(digest, ref(msg).digest())
                    expected_pads = 2 if 56 <= n % 64 <= 63 else 1
                    self.assertEqual(ctx.padded_blocks, expected_pads)
                    self.assertEqual(ctx.blocks_compressed, n // 64 + expected_pads)

    def test_state_machine_transitions(self) -> None:
        ctx = MD5Engine()
        self.assertIs(ctx.state, PadState.AWAITING_DATA)
        self.assertFalse(ctx.absorb(b"x" * 64))
        self.assertIs(ctx.state, PadState.AWAITING_DATA)
        self.assertFalse(ctx.absorb(b"x" * 60))
        self.assertIs(ctx.state, PadState.AWAITING_LENGTH_BLOCK)
        self.assertTrue(ctx.absorb(b""))
        self.assertIs(ctx.state, PadState.DONE)
        self.assertEqual(ctx.digest(), hashlib.md5(b"x" * 124).digest())

    def test_single_terminal_call(self) -> None:
        ctx = SHA1Engine()
        self.assertTrue(ctx.absorb(b"abc"))
        self.assertEqual(ctx.hexdigest(), "a9993e364706816aba3e25717850c26c9cd0d89d")
        self.assertEqual(ctx.total_bits, 24)

    def test_empty_input_is_one_call(self) -> None:
        ctx = CountingMD5()
        self.assertTrue(ctx.absorb(b""))
        self.assertEqual(ctx.padded_blocks, 1)
        self.assertEqual(ctx.hexdigest(), "d41d8cd98f00b204e9800998ecf8427e")

    def test_padding_bytes_not_counted(self) -> None:
        ctx = MD5Engine()
        ctx.absorb(b"a" * 64)
        ctx.absorb(b"a" * 58)
        ctx.absorb(b"")
        self.assertEqual(ctx.total_bits, 8 * 122)

    def test_bit_counter_wraps_at_64_bits(self) -> None:
        for cls in (RecordingMD5, RecordingSHA1):
            ctx = cls()
            ctx._total_bits = MASK64 - 7
            self.assertTrue(ctx.absorb(b"a"))
            self.assertEqual(ctx.total_bits, 0)
            self.assertEqual(len(ctx.blocks), 1)
            block = ctx.blocks[0]
            self.assertEqual(block[:2], b"a\x80")
            self.assertEqual(block[LENGTH_OFFSET:], b"\x00" * 8)

    def test_length_field_byte_order(self) -> None:
        md5_ctx = RecordingMD5()
        md5_ctx.absorb(b"abc")
        self.assertEqual(md5_ctx.blocks[0][LENGTH_OFFSET:], (24).to_bytes(8, "little"))
        sha1_ctx = RecordingSHA1()
        sha1_ctx.absorb(b"abc")
        self.assertEqual(sha1_ctx.blocks[0][LENGTH_OFFSET:], (24).to_bytes(8, "big"))


class TestEngineContract(unittest.TestCase):
    def test_oversized_block_rejected(self) -> None:
        for alg in Algorithm:
            ctx = new(alg)
            with self.assertRaises(BlockSizeError):
                ctx.absorb(b"\x00" * 65)
            self.assertIs(ctx.state, PadState.AWAITING_DATA)
            self.assertEqual(ctx.total_bits, 0)

    def test_block_size_error_is_value_error(self) -> None:
        self.assertTrue(issubclass(BlockSizeError, ValueError))

    def test_data_after_final_block_rejected(self) -> None:
        ctx = SHA1Engine()
        ctx.absorb(b"z" * 57)
        with self.assertRaises(BlockSizeError):
            ctx.absorb(b"more")

    def test_absorb_after_done_rejected(self) -> None:
        ctx = MD5Engine()
        ctx.absorb(b"abc")
        with self.assertRaises(EngineFinishedError):
            ctx.absorb(b"")

    def test_digest_before_done(self) -> None:
        ctx = SHA1Engine()
        ctx.absorb(b"y" * 64)
        with self.assertRaises(DigestNotReadyError):
            ctx.digest()

    def test_registers_snapshot(self) -> None:
        ctx = MD5Engine()
        self.assertEqual(ctx.registers(), (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476))
        self.assertEqual(len(SHA1Engine().registers()), 5)

    def test_digest_is_stable(self) -> None:
        ctx = SHA1Engine()
        ctx.absorb(b"abc")
        self.assertEqual(ctx.hexdigest(), ctx.hexdigest())
        self.assertEqual(len(ctx.digest()), Algorithm.SHA1.digest_size)

    def test_fixed_length_output(self) -> None:
        for n in (0, 1, 63, 64, 65, 500):
            self.assertEqual(len(hash_slice("md5", b"q" * n).hex()), 32)
            self.assertEqual(len(hash_slice("sha1", b"q" * n).hex()), 40)


class TestAlgorithmSelector(unittest.TestCase):
    def test_from_name(self) -> None:
        self.assertIs(Algorithm.from_name("MD5"), Algorithm.MD5)
        self.assertIs(Algorithm.from_name("sha-1"), Algorithm.SHA1)
        self.assertIs(Algorithm.from_name(Algorithm.SHA1), Algorithm.SHA1)
        with self.assertRaises(ValueError):
            Algorithm.from_name("sha256")

    def test_properties(self) -> None:
        self.assertEqual(Algorithm.MD5.hex_length, 32)
        self.assertEqual(Algorithm.SHA1.hex_length, 40)
        self.assertEqual(Algorithm.MD5.byteorder, "little")
        self.assertEqual(Algorithm.SHA1.register_count, 5)


if __name__ == "__main__":
    unittest.main()
