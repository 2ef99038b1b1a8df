# @param {string} a
# @deprecated
def main(a):
    return a
