"""
Tests for configuration and error codes.
"""

import unittest
import sys
import os
from unittest.mock import patch

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from elastic_buffer import (
    ElasticBuffer,
    ElasticBufferConfig,
    HeapAllocator,
    BoundedAllocator,
    DEFAULT_POLICY,
    SIZE_MAX,
    EB_OK,
    EB_ERROR_OUT_OF_MEMORY,
    EB_ERROR_OVERFLOW,
    OutOfMemoryError,
    SizeOverflowError,
    check_result,
    config_from_env,
    error_code,
)


class TestConfig(unittest.TestCase):
    """Test cases for ElasticBufferConfig and config_from_env."""

    def test_defaults(self):
        """Test the default configuration."""
        config = ElasticBufferConfig()
        self.assertEqual(config.max_size, SIZE_MAX)
        self.assertIs(config.policy, DEFAULT_POLICY)
        self.assertIsInstance(config.allocator, HeapAllocator)
        self.assertIsNot(config.allocator, ElasticBufferConfig().allocator)

    def test_size_max_matches_platform(self):
        """Test SIZE_MAX covers every size Python can index."""
        self.assertGreaterEqual(SIZE_MAX, sys.maxsize)

    def test_invalid_max_size(self):
        """Test a negative maximum size is rejected."""
        with self.assertRaises(ValueError):
            ElasticBufferConfig(max_size=-1)

    def test_from_empty_env(self):
        """Test unset variables keep the defaults."""
        config = config_from_env({})
        self.assertEqual(config.max_size, SIZE_MAX)
        self.assertIsInstance(config.allocator, HeapAllocator)
        self.assertNotIsInstance(config.allocator, BoundedAllocator)

    def test_from_env(self):
        """Test both variables are read."""
        config = config_from_env({
            "ELASTIC_BUFFER_MAX_SIZE": "64",
            "ELASTIC_BUFFER_MEMORY_LIMIT": "0x1000",
        })
        self.assertEqual(config.max_size, 64)
        self.assertIsInstance(config.allocator, BoundedAllocator)
        self.assertEqual(config.allocator.limit, 4096)

    def test_from_process_env(self):
        """Test os.environ is read when no mapping is given."""
        with patch.dict(os.environ, {"ELASTIC_BUFFER_MAX_SIZE": "128"}):
            config = config_from_env()
        self.assertEqual(config.max_size, 128)

    def test_from_env_invalid(self):
        """Test malformed or negative values are rejected."""
        with self.assertRaises(ValueError):
            config_from_env({"ELASTIC_BUFFER_MAX_SIZE": "lots"})
        with self.assertRaises(ValueError):
            config_from_env({"ELASTIC_BUFFER_MEMORY_LIMIT": "-1"})

    def test_buffer_honours_env_limits(self):
        """Test a buffer built from environment settings applies them."""
        config = config_from_env({
            "ELASTIC_BUFFER_MAX_SIZE": "8",
            "ELASTIC_BUFFER_MEMORY_LIMIT": "4",
        })
        buffer = ElasticBuffer(0, 4, config)

        with self.assertRaises(SizeOverflowError):
            buffer.append(bytes(12), 3, 4)
        with self.assertRaises(OutOfMemoryError):
            buffer.append(bytes(8), 2, 4)

        buffer.append(bytes(4), 1, 4)
        self.assertEqual(buffer.size, 4)


class TestErrorCodes(unittest.TestCase):
    """Test cases for result codes."""

    def test_check_result(self):
        """Test only EB_OK counts as success."""
        self.assertTrue(check_result(EB_OK))
        self.assertFalse(check_result(EB_ERROR_OUT_OF_MEMORY))
        self.assertFalse(check_result(EB_ERROR_OVERFLOW))

    def test_error_code(self):
        """Test exceptions map to their result codes."""
        self.assertEqual(error_code(OutOfMemoryError("x")), EB_ERROR_OUT_OF_MEMORY)
        self.assertEqual(error_code(SizeOverflowError("x")), EB_ERROR_OVERFLOW)
        self.assertEqual(error_code(MemoryError()), EB_ERROR_OUT_OF_MEMORY)
        with self.assertRaises(TypeError):
            error_code(ValueError("x"))

    def test_requested_size_recorded(self):
        """Test allocation failures report the size that was refused."""
        config = ElasticBufferConfig(allocator=BoundedAllocator(0))
        with self.assertRaises(OutOfMemoryError) as context:
            ElasticBuffer(3, 4, config)
        self.assertEqual(context.exception.requested, 12)


if __name__ == '__main__':
    unittest.main(verbosity=2)
