# Test Nested Schema Input
#
# @param {string} before
# @param {object} obj
# @ {string} str
# @ {boolean} bool
# @ {object} obj
# @   {string} str
# @   {object} obj
# @     {string} str
# @ {number} num
# @param {string} after
# @returns {string}
def main(before, obj, after):
    return before
