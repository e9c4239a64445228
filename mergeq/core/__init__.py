"""Core types shared across layers.

- models: Issue, MRFields, queue criteria and results
- protocols: IssueStore and Mailer collaborator contracts
- errors: Exception hierarchy
"""
