# @param {string} a
def main(a:
    return a
