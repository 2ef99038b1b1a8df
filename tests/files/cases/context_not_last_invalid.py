# @param {string} a
def main(context, a):
    return a
