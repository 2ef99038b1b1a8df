# Sub directory index
# @param {number} value
# @returns {number}
def main(value, context=None):
    return value
