# @param {enum} color
#   "red"
#   ["red", 2]
def main(color):
    return color
