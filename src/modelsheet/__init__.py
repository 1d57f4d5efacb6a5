"""modelsheet — character model sheets from a folder of renders.

Match front/back/left/right/hero PNG views by file name, plan their
placement on a fixed canvas (hero on the right, a 2x2 grid on the left),
and drive a compositor that places each view as a linked layer and
writes a layered PSD plus a flattened JPEG next to the sources.
"""
