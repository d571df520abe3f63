"""Job application tracker: lifecycle recording and progress analytics."""
