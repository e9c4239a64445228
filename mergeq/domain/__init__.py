"""Domain layer package.

This package contains the merge queue logic:
- mr_fields: MR field extraction from issue descriptions
- status: Derived display status
- age: Age bucketing for listings
- queue_filter: Base query plus worker/epic filtering
- rejection: The reject state transition
- merge_queue: Rig-bound service combining the above
"""
