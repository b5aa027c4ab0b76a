import os
from dataclasses import fields
from typing import List, Literal, Optional, get_args, get_origin

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

_ARROW_TYPES = {
    int: pa.int64(),
    float: pa.float64(),
    str: pa.string(),
    bool: pa.bool_(),
}


def arrow_schema(entry_cls) -> pa.Schema:
    """Arrow schema with one column per field of the dataclass ``entry_cls``."""
    columns = []
    for f in fields(entry_cls):
        kind = f.type
        if get_origin(kind) is Literal:
            kind = type(get_args(kind)[0])
        if kind not in _ARROW_TYPES:
            raise TypeError(f"No parquet column type for field '{f.name}' of {entry_cls.__name__}")
        columns.append(pa.field(f.name, _ARROW_TYPES[kind], nullable=False))
    return pa.schema(columns)


class ParquetWriter:
    """Writes batches of dataclass rows to numbered parquet part files in ``folder``.

    Every part is written with the column types of ``schema``, so parts merge
    cleanly whatever values a batch happens to hold.
    """
    def __init__(self, folder: str, schema):
        self.folder = folder
        self.schema = arrow_schema(schema)
        os.makedirs(folder, exist_ok=True)
        self.counter = 0

    def write_batch(self, entries: List) -> Optional[str]:
        if not entries:
            return None
        os.makedirs(self.folder, exist_ok=True)

        df = pd.DataFrame([entry.to_dict() for entry in entries], columns=self.schema.names)
        file_path = os.path.join(self.folder, f"part-{self.counter:05d}.parquet")
        self.counter += 1

        table = pa.Table.from_pandas(df, schema=self.schema, preserve_index=False)
        pq.write_table(table, file_path, compression='brotli')
        return file_path
