"""
SJF vs priority-with-aging CPU scheduling simulator.
"""
