"""Shared utilities for surfacefire.

Modules:
    - fire_util: Enumerations and numeric tolerances.
    - unit_conversions: Native to display unit conversions.
    - data_classes: Dataclasses for run configuration.
    - config_loader: Reader for .cfg run configurations.
    - logger: Step trace logging with Parquet output.
    - logger_schemas: Data schemas for trace entries.
    - parquet_writer: Parquet file writing utilities.
"""
