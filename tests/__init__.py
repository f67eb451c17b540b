"""
BookMatch Test Suite

Tests are organized into:
- unit/: Unit tests for individual components
- integration/: Strategy orchestration against a mocked Google Books API
"""
