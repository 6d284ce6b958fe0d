# -*- coding: utf-8 -*-
"""
Services Package - Domain services for the Hard75 tracker

This package contains the business logic services organized by domain:
- config: Unified configuration service (defaults, config.json, environment)
- tracking: Thread-name codec, day clock, progress store and panel rendering
- scheduling: Daily reconciliation loop and its runtime state
- entries: Daily entry threads and the submission completion detector
- cheat: Cheat-day ledger
- reminders: Daily reminder alarms
- discord: Gateway to the guild and the error report channel

All services follow the same patterns:
- Immutable dataclasses for parsed records and configuration
- Module-level accessors (get_*_service / reset_*_service) for shared instances
- Errors are raised at the Discord boundary and logged by the orchestrating service
"""
