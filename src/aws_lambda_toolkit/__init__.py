"""AWS Lambda toolkit.

Helpers for Lambda functions working with DynamoDB (batched writes, paginated
reads), an SNS event stream (typed message attributes, pass/fail envelopes)
and SSM Parameter Store, plus API Gateway response formatting.
"""
