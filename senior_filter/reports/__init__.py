"""Report generators (JSON table payloads and Excel workbooks)."""
