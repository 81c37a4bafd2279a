"""
Classification guess stage for an email processing pipeline.

For each in-flight message:
- Extracts a canonical record (sender, recipients, subject, primary text)
- Sends it to an external classification service on a bounded worker pool
- Appends the service answer as a header, within a configurable deadline

Architecture: pydantic models + httpx client + thread pool with deadline
"""

__version__ = "0.1.0"
