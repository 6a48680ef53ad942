"""
The MODEL layer contains pure data structures and algorithms.
It has NO knowledge of the host loop or of any rendering backend.
It deals with directions, keyframes, trails, projections and data I/O.
"""
