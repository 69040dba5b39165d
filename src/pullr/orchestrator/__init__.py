"""Pull-request orchestration components.

- Settings loaded from .env
- Structured logging
- Git remote/branch introspection and forge API dispatch
- The pull-request, issue-assignment and assignee-listing workflows
"""
