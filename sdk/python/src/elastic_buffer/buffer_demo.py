#!/usr/bin/env python3
"""
ElasticBuffer Demonstration

This script walks through the buffer lifecycle: growing by appends,
reading records back, shrinking, and exporting the storage.
"""

import sys

from .buffer import ElasticBuffer
from .record_array import RecordArray


def demonstrate_elastic_buffer() -> bool:
    """Demonstrate ElasticBuffer functionality."""
    print("ElasticBuffer Demonstration")
    print("===========================")

    try:
        buffer = ElasticBuffer(0, 4)
        for i in range(10):
            buffer.append(i.to_bytes(4, "little"), 1, 4)
            print(f"  append #{i}: size={buffer.size} capacity={buffer.capacity}")

        third = int.from_bytes(buffer.get(3, 4), "little")
        print(f"Record 3 reads back as {third}")

        buffer.shrink(8, 4)
        print(f"After shrinking 8 records: size={buffer.size} capacity={buffer.capacity}")

        # The same bytes read as 2-byte records
        print(f"As 2-byte records: {buffer.record_count(2)} records")

        exported = buffer.export(4)
        print(f"Exported {exported.record_count} records: {bytes(exported.data).hex()}")

        with RecordArray("<If") as points:
            points.extend([(1, 0.5), (2, 1.5), (3, 2.5)])
            print(f"RecordArray rows: {points.to_list()}")

        print("\nElasticBuffer demonstration completed successfully!")
        return True

    except Exception as e:
        print(f"ElasticBuffer demonstration failed: {e}")
        import traceback
        traceback.print_exc()
        return False


def main():
    """Main entry point."""
    success = demonstrate_elastic_buffer()
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
