"""
Timetable conflict resolver: reads source-tagged service times, keeps one
service per conflicting cluster and writes the result grouped by source.
"""
