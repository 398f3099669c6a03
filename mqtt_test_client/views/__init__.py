"""
Tk views. Importing this package does not pull in tkinter; import the
view modules directly.
"""
