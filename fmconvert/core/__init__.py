"""
Binary Data Model (FINAL / FROZEN)

Defines WHAT the converter writes, independent of how text is parsed.

Invariants:
- All binary fields are little endian and packed.
- Matrix header: magic_id:u4, num_values:u8, num_rows:u4, num_cols:u4, float_size:u4.
- Vector header: file_version:u4, element_size:u4, num_rows:u4.
- Sparse entry: feature_id:u4, value:f4.
- Headers mirror the Schema discovered by the scan pass exactly.

Core explicitly does NOT:
- Perform IO
- Parse text
"""
