"""Application layer: invocation recording and interception adapters."""
