"""Statement-level guards for SQL issued by the customer store.

Reads are restricted to SELECT; writes to the DML and CREATE statements the
app actually uses.
"""
