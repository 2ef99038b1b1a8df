def main(a=True, b="false", c=1, d=None, e=[], f={}, context=None):
    return None
