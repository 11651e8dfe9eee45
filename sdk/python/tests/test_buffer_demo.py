"""
Tests for the demonstration script.
"""

import unittest
import sys
import os
from io import StringIO
from contextlib import redirect_stdout

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from elastic_buffer.buffer_demo import demonstrate_elastic_buffer, main


class TestBufferDemo(unittest.TestCase):
    """Test cases for the buffer demonstration."""

    def test_demonstration_succeeds(self):
        """Test the demonstration runs end to end."""
        output = StringIO()
        with redirect_stdout(output):
            self.assertTrue(demonstrate_elastic_buffer())

        text = output.getvalue()
        self.assertIn("Record 3 reads back as 3", text)
        self.assertIn("Exported 2 records: 0000000001000000", text)
        self.assertIn("completed successfully", text)

    def test_main_exit_code(self):
        """Test main exits with status zero."""
        with redirect_stdout(StringIO()):
            with self.assertRaises(SystemExit) as context:
                main()
        self.assertEqual(context.exception.code, 0)


if __name__ == '__main__':
    unittest.main(verbosity=2)
