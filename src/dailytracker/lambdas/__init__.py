"""
AWS Lambda functions for the DailyTracker application.

Modules:
    api_handler: REST API endpoints for days, history and the counter
"""

# Lambda function entry points are imported directly from their modules
# This allows for clean imports in the AWS SAM template
