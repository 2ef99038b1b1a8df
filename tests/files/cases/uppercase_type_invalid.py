# @param {STRING} a
def main(a):
    return a
