"""
Tests for struct-typed record arrays.
"""

import unittest
import sys
import os
import struct

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from elastic_buffer import RecordArray, ElasticBuffer, BufferState


class TestRecordArray(unittest.TestCase):
    """Test cases for RecordArray."""

    def setUp(self):
        self.points = RecordArray("<iH")

    def test_record_width(self):
        """Test the record width follows the struct layout."""
        self.assertEqual(self.points.record_width, 6)
        self.assertEqual(self.points.format, "<iH")
        self.assertIsInstance(self.points.buffer, ElasticBuffer)

    def test_append_and_index(self):
        """Test appended rows read back by position."""
        self.points.append(1, 2)
        self.points.append(-5, 7)

        self.assertEqual(len(self.points), 2)
        self.assertEqual(self.points[0], (1, 2))
        self.assertEqual(self.points[1], (-5, 7))
        self.assertEqual(self.points[-1], (-5, 7))

    def test_index_out_of_range(self):
        """Test out-of-range positions raise IndexError."""
        self.points.append(1, 2)
        with self.assertRaises(IndexError):
            self.points[1]
        with self.assertRaises(IndexError):
            self.points[-2]

    def test_extend_and_iterate(self):
        """Test bulk append and iteration in order."""
        rows = [(i, i * 10) for i in range(5)]
        self.points.extend(rows)

        self.assertEqual(list(self.points), rows)
        self.assertEqual(self.points.to_list(), rows)

    def test_extend_empty(self):
        """Test extending with no rows changes nothing."""
        self.points.extend([])
        self.assertEqual(len(self.points), 0)

    def test_setitem(self):
        """Test rows can be overwritten in place."""
        self.points.extend([(1, 1), (2, 2)])
        self.points[0] = (9, 9)
        self.points[-1] = (8, 8)
        self.assertEqual(self.points.to_list(), [(9, 9), (8, 8)])

    def test_pop(self):
        """Test pop removes and returns the last row."""
        self.points.extend([(1, 1), (2, 2)])
        self.assertEqual(self.points.pop(), (2, 2))
        self.assertEqual(len(self.points), 1)
        self.assertEqual(self.points.pop(), (1, 1))
        with self.assertRaises(IndexError):
            self.points.pop()

    def test_clear(self):
        """Test clear empties the array."""
        self.points.extend([(1, 1), (2, 2)])
        self.points.clear()
        self.assertEqual(len(self.points), 0)
        self.assertEqual(self.points.buffer.capacity, 0)

    def test_export(self):
        """Test export yields the packed rows and retires the array."""
        rows = [(1, 2), (3, 4)]
        self.points.extend(rows)

        exported = self.points.export()

        layout = struct.Struct("<iH")
        self.assertEqual(bytes(exported.data), b"".join(layout.pack(*row) for row in rows))
        self.assertEqual(exported.record_count, 2)
        with self.assertRaises(RuntimeError):
            len(self.points)

    def test_raw_view_with_other_width(self):
        """Test the underlying bytes can be counted with a different width."""
        self.points.extend([(1, 2), (3, 4)])
        self.assertEqual(self.points.buffer.record_count(2), 6)
        self.assertEqual(self.points.buffer.record_count(5), 2)

    def test_compiled_struct(self):
        """Test a precompiled Struct is accepted."""
        array = RecordArray(struct.Struct("<d"))
        array.append(1.5)
        self.assertEqual(array[0], (1.5,))

    def test_zero_size_format(self):
        """Test a format with no bytes is rejected."""
        with self.assertRaises(ValueError):
            RecordArray("")

    def test_context_manager(self):
        """Test leaving a with block frees the underlying buffer."""
        with RecordArray("<I") as array:
            array.append(7)
        self.assertEqual(array.buffer.state, BufferState.FREED)

    def test_repr(self):
        """Test the representation shows format and length."""
        self.points.append(1, 2)
        self.assertEqual(repr(self.points), "RecordArray(format='<iH', records=1)")


if __name__ == '__main__':
    unittest.main(verbosity=2)
