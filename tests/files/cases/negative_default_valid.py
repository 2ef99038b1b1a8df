# @param {number} offset
# @param {array} pair
def main(offset=-1.5, pair=(1, -2)):
    return offset
