# Test function
#
# @param {boolean} a alpha
# @returns {boolean}
def main(a, context):
    return a
