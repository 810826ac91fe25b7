"""SNS event stream helpers.

Publishing with typed message attributes, parsing of inbound SNS events and
a handler wrapper that publishes a pass/fail envelope for every event.
"""
