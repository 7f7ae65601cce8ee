"""
Types shared by the engine and the text/record formats.
"""
