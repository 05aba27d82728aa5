"""Record stream ingestion.

This module decodes reduce-stage output streams into records.
It feeds key/value pairs to the output task driver.
"""
