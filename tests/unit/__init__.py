"""
Unit tests for the classification guess stage.

Test individual components in isolation:
- Data models (serialization, key order, constraints)
- Content extraction (plain over HTML, attachments, nesting)
- Request building (addresses, subject, MIME failures)
- Invoker (deadline, transport errors, query parameters)
- Stage wiring (header mutation, failure containment)
"""
